import sys

from auth_autofill.cli import main


if __name__ == "__main__":
    sys.exit(main())
