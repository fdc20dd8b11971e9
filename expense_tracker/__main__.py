import sys

from expense_tracker.cli import main

sys.exit(main())
