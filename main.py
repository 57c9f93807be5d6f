#!/usr/bin/env python3
"""
Run stackline from a source checkout without installing it.

    ./main.py programs/nested_calls.sl
    ./main.py check programs/nested_calls.sl
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

from stackline.cli.main import cli

if __name__ == "__main__":
    if len(sys.argv) == 1:
        sys.argv.append('--help')

    # a bare program path means `run <path>`
    if len(sys.argv) == 2 and sys.argv[1].endswith('.sl'):
        sys.argv.insert(1, 'run')

    cli()
