import sys

from backlog.cli import main

sys.exit(main())
