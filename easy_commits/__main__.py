import sys

from easy_commits.cli.main import main

sys.exit(main())
