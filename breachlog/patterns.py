"""Breach Log Analyzer - Constants and patterns"""

import re
from datetime import date

VERSION = "1.0.0"

# Blocks are separated by one or more blank (whitespace-only) lines
BLOCK_SEPARATOR = re.compile(r'\n\s*\n')

# Leading IPv4 address on the first line of a block
IP_PATTERN = re.compile(r'^(\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})')

# Only this prefix counts as internal. 172.16/12 and 192.168/16 are external.
INTERNAL_IP_PREFIX = '10.'

USER_ID_PATTERN = re.compile(r'user_id=([^&\s]+)')

# Timestamp patterns, tried in order. Each entry is (name, regex, strptime formats).
TIMESTAMP_PATTERNS = [
    ('bracketed_iso', re.compile(r'\[(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\]'),
     ('%Y-%m-%d %H:%M:%S',)),
    ('iso', re.compile(r'(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})'),
     ('%Y-%m-%d %H:%M:%S',)),
    ('bracketed_slash', re.compile(r'\[(\d{2}/\d{2}/\d{4} \d{2}:\d{2}:\d{2})\]'),
     ('%d/%m/%Y %H:%M:%S', '%m/%d/%Y %H:%M:%S')),
    ('time_only', re.compile(r'(\d{2}:\d{2}:\d{2})'),
     ('%H:%M:%S',)),
]

# Date given to every bare HH:MM:SS match
BARE_TIME_ANCHOR = date(1970, 1, 1)

# Interval regularity thresholds
SIMILARITY_WINDOW_MS = 2000
REGULARITY_RATIO_THRESHOLD = 0.7
MAX_MEAN_INTERVAL_MS = 15000
MIN_INTERVALS = 2

REASON_NORMAL = 'Normal activity'
REASON_INSUFFICIENT = 'Insufficient data'
REASON_REPEATED_HITS = 'Repeated API hits every {seconds}s'

VERDICTS = {
    True: {
        'title': 'Breach Detected!',
        'description': 'Suspicious activity or external access detected in the logs.',
        'style': 'red',
    },
    False: {
        'title': 'System Safe',
        'description': 'No suspicious activity detected. All systems appear normal.',
        'style': 'green',
    },
}

ERROR_MESSAGE = 'Error analyzing log file. Please check the file format.'
