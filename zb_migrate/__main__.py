#!/usr/bin/env python3
"""
Entry point for running zb_migrate as a module.
"""

import sys

from zb_migrate import main

if __name__ == '__main__':
    sys.exit(main())
