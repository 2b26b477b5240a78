import sys

from probrng.cli import main

sys.exit(main())
