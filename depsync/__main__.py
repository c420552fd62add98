import sys

from depsync.cli import main

sys.exit(main())
