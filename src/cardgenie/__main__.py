import sys

from cardgenie.app import main

sys.exit(main())
