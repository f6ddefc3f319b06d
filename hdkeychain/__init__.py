#!/usr/bin/env python3

# Copyright (C) The hdkeychain developers
#
# This file is part of hdkeychain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdkeychain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the hdkeychain package."

import logging

name = "hdkeychain"
__version__ = "2026.10.19"
__author__ = "The hdkeychain developers"
__author_email__ = "devs@hdkeychain.org"
__copyright__ = "Copyright (C) 2026 The hdkeychain developers"
__license__ = "MIT License"

# library logging: the application decides where records go
logging.getLogger(__name__).addHandler(logging.NullHandler())
