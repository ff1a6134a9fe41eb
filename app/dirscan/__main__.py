"""Allow ``python -m dirscan``."""

from dirscan.cli.main import run

if __name__ == "__main__":
    run()
