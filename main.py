#!/usr/bin/env python3
"""batchmake - batch builds and publish checklist."""

from batchmake.cli import main

if __name__ == "__main__":
    main()
