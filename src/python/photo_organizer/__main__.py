import sys

from photo_organizer.cli import main

sys.exit(main())
