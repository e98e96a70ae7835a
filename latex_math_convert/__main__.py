import sys

from latex_math_convert.workflows.cli import cli_main

if __name__ == "__main__":
    sys.exit(cli_main())
