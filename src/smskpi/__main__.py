"""smskpi launcher"""
import sys

from smskpi.main import main

if __name__ == "__main__":
    sys.exit(main())
