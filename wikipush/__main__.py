import sys

from wikipush.cli import main

sys.exit(main())
