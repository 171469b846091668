import sys

from text_stats.main import main

sys.exit(main())
