"""
Main entry point for the readme_crawler package.

Allows running the crawler as: python -m readme_crawler
"""

import sys

from readme_crawler.cli import main

if __name__ == "__main__":
    sys.exit(main())
