#!/usr/bin/env python3
"""
cpx - Recursive copy with a single-line progress bar

Usage:
    cpx <source> <destination>
    cpx -n <source> <destination>

This is the main entry point that delegates to the cpx package.

Author: Carlos Andrade <carlos@perezandrade.com>
"""

from cpx.core import main

if __name__ == '__main__':
    main()
