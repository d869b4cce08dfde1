"""Entry point for python -m photo_review."""

import sys

from photo_review.viewer.app import main

sys.exit(main())
