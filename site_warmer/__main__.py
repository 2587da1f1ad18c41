# site_warmer/__main__.py
from site_warmer.cli import cli

if __name__ == "__main__":
    cli()
