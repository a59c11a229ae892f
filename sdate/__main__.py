import sys

from sdate.cli import main

sys.exit(main())
