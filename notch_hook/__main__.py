"""Allow `python -m notch_hook`."""
import sys

from notch_hook.cli import main

sys.exit(main())
