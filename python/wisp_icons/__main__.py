# python/wisp_icons/__main__.py
# Allows `python -m wisp_icons OUT.png` as an alias for the wisp-icons console script
# RELEVANT FILES: python/wisp_icons/cli.py, tests/test_cli.py
import sys

from .cli import main

sys.exit(main())
