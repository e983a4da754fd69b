"""
Run with: python -m gdpglobe
"""
import sys

from gdpglobe.main import main

if __name__ == "__main__":
    sys.exit(main())
