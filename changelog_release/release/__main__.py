#!/usr/bin/env python3
"""Allow running as: python3 -m changelog_release.release <version>"""

from changelog_release.release.action import main
import sys

sys.exit(main())
