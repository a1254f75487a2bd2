# Copyright 2026 The ndnkeychain developers
#
# This file is part of ndnkeychain.
#
# ndnkeychain is free software: you can redistribute it and/or modify
# it under the terms of version 3 of the GNU Lesser General Public
# License as published by the Free Software Foundation.
#
# ndnkeychain is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with ndnkeychain.  If not, see
# <http://www.gnu.org/licenses/>.

#

import time


# private key material lives in the key storage; public
# key material may be looked up in either backend
KEY_CLASS_PUBLIC = "public"
KEY_CLASS_PRIVATE = "private"


def now_milliseconds():
    """
    current time as an integer count of milliseconds since the epoch
    """
    return int(time.time() * 1000)
