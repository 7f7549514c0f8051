"""Breach Log Analyzer - Core analysis engine"""

import logging
import math
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from rich.progress import Progress, SpinnerColumn, TextColumn

from .config import DEFAULT_POLICY, DetectionPolicy
from .exceptions import UnreadableInputError
from .models import AnalysisResult, AnalysisStats, IPRecord, UserActivityRecord
from .patterns import (
    BARE_TIME_ANCHOR,
    BLOCK_SEPARATOR,
    INTERNAL_IP_PREFIX,
    IP_PATTERN,
    REASON_INSUFFICIENT,
    REASON_NORMAL,
    REASON_REPEATED_HITS,
    TIMESTAMP_PATTERNS,
    USER_ID_PATTERN,
)

logger = logging.getLogger(__name__)

# (timestamp, stripped request line)
UserRequest = Tuple[datetime, str]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def split_blocks(content: str) -> List[str]:
    """Split raw log text into trimmed, non-empty blocks"""
    blocks = [block.strip() for block in BLOCK_SEPARATOR.split(content)]
    return [block for block in blocks if block]


def extract_timestamp(line: str, anchor: date = BARE_TIME_ANCHOR) -> Optional[datetime]:
    """Return the first recognised timestamp in a line, or None.

    Bare HH:MM:SS values carry no date, so they are all placed on ``anchor``.
    Entries that cross midnight will therefore sort out of order.
    """
    for name, pattern, formats in TIMESTAMP_PATTERNS:
        match = pattern.search(line)
        if not match:
            continue
        for fmt in formats:
            try:
                parsed = datetime.strptime(match.group(1), fmt)
            except ValueError:
                continue
            if name == 'time_only':
                return datetime.combine(anchor, parsed.time())
            return parsed
    return None


def block_lines(block: str) -> List[str]:
    """Lines of a block, split on newlines only"""
    return [line.rstrip('\r') for line in block.split('\n')]


def is_internal_ip(address: str) -> bool:
    return address.startswith(INTERNAL_IP_PREFIX)


def analyze_ips(blocks: List[str]) -> List[IPRecord]:
    """Classify the leading IP of each block, first occurrence wins"""
    records: List[IPRecord] = []
    seen = set()

    for block in blocks:
        lines = block_lines(block)
        match = IP_PATTERN.match(lines[0])
        if not match:
            continue

        address = match.group(1)
        if address in seen:
            continue
        seen.add(address)

        records.append(IPRecord(
            address=address,
            is_internal=is_internal_ip(address),
            request_lines=tuple(line for line in lines[1:] if line.strip())
        ))

    logger.debug("Found %d unique IPs in %d blocks", len(records), len(blocks))
    return records


def collect_user_requests(blocks: List[str]) -> Dict[str, List[UserRequest]]:
    """Group every line carrying both a user id and a timestamp by user"""
    user_requests: Dict[str, List[UserRequest]] = {}

    for block in blocks:
        for line in block_lines(block):
            user_match = USER_ID_PATTERN.search(line)
            if not user_match:
                continue
            timestamp = extract_timestamp(line)
            if timestamp is None:
                continue
            user_requests.setdefault(user_match.group(1), []).append((timestamp, line.strip()))

    return user_requests


def order_requests(requests: List[UserRequest]) -> List[UserRequest]:
    """Sort by timestamp; ties keep their original order"""
    return sorted(requests, key=lambda request: request[0])


def compute_intervals(requests: List[UserRequest]) -> List[float]:
    """Millisecond gaps between consecutive requests, sorted by time"""
    ordered = order_requests(requests)
    return [
        (current[0] - previous[0]) / timedelta(milliseconds=1)
        for previous, current in zip(ordered, ordered[1:])
    ]


def classify_user(user_id: str, requests: List[UserRequest],
                  policy: DetectionPolicy = DEFAULT_POLICY) -> UserActivityRecord:
    count = len(requests)
    if count < 2:
        return UserActivityRecord(user_id, count, False, REASON_NORMAL)

    intervals = compute_intervals(requests)
    if len(intervals) <= policy.min_intervals:
        return UserActivityRecord(user_id, count, False, REASON_INSUFFICIENT)

    mean = sum(intervals) / len(intervals)
    similar = sum(1 for interval in intervals if abs(interval - mean) < policy.similarity_window_ms)
    ratio = similar / len(intervals)
    suspicious = ratio > policy.regularity_ratio and mean < policy.max_mean_interval_ms
    seconds = _round_half_up(mean / 1000)

    return UserActivityRecord(
        user_id=user_id,
        request_count=count,
        is_suspicious=suspicious,
        reason=REASON_REPEATED_HITS.format(seconds=seconds) if suspicious else REASON_NORMAL,
        avg_interval_seconds=seconds
    )


def detect_suspicious_behavior(user_requests: Dict[str, List[UserRequest]],
                               policy: DetectionPolicy = DEFAULT_POLICY) -> List[UserActivityRecord]:
    records = []
    for user_id, requests in user_requests.items():
        record = classify_user(user_id, requests, policy)
        logger.debug("User %s: %d requests, %s", user_id, record.request_count, record.reason)
        records.append(record)
    return records


def analyze_user_behavior(blocks: List[str],
                          policy: DetectionPolicy = DEFAULT_POLICY) -> List[UserActivityRecord]:
    return detect_suspicious_behavior(collect_user_requests(blocks), policy)


def determine_breach(ip_records: List[IPRecord], user_records: List[UserActivityRecord]) -> bool:
    has_external_ips = any(not record.is_internal for record in ip_records)
    has_suspicious_users = any(record.is_suspicious for record in user_records)
    return has_external_ips or has_suspicious_users


def compute_stats(blocks: List[str], ip_records: List[IPRecord],
                  user_records: List[UserActivityRecord]) -> AnalysisStats:
    internal = sum(1 for record in ip_records if record.is_internal)
    return AnalysisStats(
        total_blocks=len(blocks),
        total_ips=len(ip_records),
        internal_ips=internal,
        external_ips=len(ip_records) - internal,
        suspicious_users=sum(1 for record in user_records if record.is_suspicious)
    )


def build_result(blocks: List[str], ip_records: List[IPRecord],
                 user_records: List[UserActivityRecord]) -> AnalysisResult:
    return AnalysisResult(
        ip_records=tuple(ip_records),
        user_records=tuple(user_records),
        is_breach=determine_breach(ip_records, user_records),
        stats=compute_stats(blocks, ip_records, user_records)
    )


def analyze(content: str, policy: DetectionPolicy = DEFAULT_POLICY) -> AnalysisResult:
    """Run the full pipeline over the contents of one log file"""
    blocks = split_blocks(content)
    logger.debug("Split log into %d blocks", len(blocks))
    return build_result(blocks, analyze_ips(blocks), analyze_user_behavior(blocks, policy))


def read_log_file(filepath) -> str:
    """Read a log file as text, raising UnreadableInputError on failure"""
    path = Path(filepath)
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            content = f.read()
    except OSError as e:
        raise UnreadableInputError(path, e.strerror or str(e)) from e

    logger.debug("Read %d characters from %s", len(content), path)
    return content


class LogAnalyzer:
    """Reusable front end to the pipeline.

    Holds configuration only; every call works on its own collections.
    """

    def __init__(self, policy: DetectionPolicy = DEFAULT_POLICY, console=None):
        self.policy = policy
        self.console = console

    def analyze(self, content: str) -> AnalysisResult:
        return analyze(content, self.policy)

    def analyze_file(self, filepath) -> AnalysisResult:
        content = read_log_file(filepath)

        if self.console is None:
            return self.analyze(content)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True
        ) as progress:
            task = progress.add_task("Splitting log into blocks...", total=3)
            blocks = split_blocks(content)

            progress.update(task, advance=1, description="Classifying IP addresses...")
            ip_records = analyze_ips(blocks)

            progress.update(task, advance=1, description="Analyzing user behavior...")
            user_records = analyze_user_behavior(blocks, self.policy)
            progress.update(task, advance=1)

        return build_result(blocks, ip_records, user_records)
