"""Allow ``python -m inetgen``."""

from inetgen.cli import main

if __name__ == "__main__":
    main()
