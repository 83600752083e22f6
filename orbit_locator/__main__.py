import sys

from orbit_locator.cli import main

sys.exit(main())
