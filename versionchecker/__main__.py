import sys

from versionchecker.cli import main

sys.exit(main())
