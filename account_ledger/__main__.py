#!/usr/bin/env python3
"""Entry point: python -m account_ledger"""

import sys

from .demo import main


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(130)
