"""Allow ``python -m rpgstats``."""

from rpgstats.main import run

if __name__ == "__main__":
    run()
