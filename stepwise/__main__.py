import sys

from stepwise.cli import main

sys.exit(main())
