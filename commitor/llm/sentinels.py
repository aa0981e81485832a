"""Sentinel markers shared by the prompt builder and the response parser.

The prompt asks the model to wrap the title and body in these markers and
the parser looks for the same literals. Changing any of them is a contract
change: bump SENTINEL_VERSION.
"""

SENTINEL_VERSION = 1

TITLE_START = "<<TITLE>>"
TITLE_END = "<<TITLE_END>>"
BODY_START = "<<BODY>>"
BODY_END = "<<BODY_END>>"

ALL_SENTINELS = (TITLE_START, TITLE_END, BODY_START, BODY_END)
