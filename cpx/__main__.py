#!/usr/bin/env python3
"""
Entry point for running cpx as a module.
Allows: python -m cpx

Author: Carlos Andrade <carlos@perezandrade.com>
"""

from .core import main

if __name__ == '__main__':
    main()
