"""Allow ``python -m deepsum``."""

from deepsum.cli import main

if __name__ == "__main__":
    main()
