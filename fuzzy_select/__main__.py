import sys

from fuzzy_select.cli import main

sys.exit(main())
