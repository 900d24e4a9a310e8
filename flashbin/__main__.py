# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

import sys

from flashbin.cli import main

sys.exit(main())
