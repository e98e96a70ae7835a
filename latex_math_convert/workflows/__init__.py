"""File discovery, I/O and the batch/CLI layer around the rewriter."""
