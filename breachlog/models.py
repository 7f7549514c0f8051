"""Breach Log Analyzer - Data models"""

from dataclasses import dataclass
from typing import Optional, Tuple, Dict


@dataclass(frozen=True)
class IPRecord:
    """Leading IP of a block and the requests that follow it"""
    address: str
    is_internal: bool
    request_lines: Tuple[str, ...]

    def to_dict(self) -> Dict:
        return {
            'address': self.address,
            'isInternal': self.is_internal,
            'requestLines': list(self.request_lines),
        }


@dataclass(frozen=True)
class UserActivityRecord:
    """Timing verdict for one user id"""
    user_id: str
    request_count: int
    is_suspicious: bool
    reason: str
    avg_interval_seconds: Optional[int] = None

    def to_dict(self) -> Dict:
        data = {
            'userId': self.user_id,
            'requestCount': self.request_count,
            'isSuspicious': self.is_suspicious,
            'reason': self.reason,
        }
        if self.avg_interval_seconds is not None:
            data['avgIntervalSeconds'] = self.avg_interval_seconds
        return data


@dataclass(frozen=True)
class AnalysisStats:
    total_blocks: int
    total_ips: int
    internal_ips: int
    external_ips: int
    suspicious_users: int

    def to_dict(self) -> Dict:
        return {
            'totalBlocks': self.total_blocks,
            'totalIPs': self.total_ips,
            'internalIPs': self.internal_ips,
            'externalIPs': self.external_ips,
            'suspiciousUsers': self.suspicious_users,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one analysis pass"""
    ip_records: Tuple[IPRecord, ...]
    user_records: Tuple[UserActivityRecord, ...]
    is_breach: bool
    stats: AnalysisStats

    def to_dict(self) -> Dict:
        return {
            'ipRecords': [r.to_dict() for r in self.ip_records],
            'userRecords': [r.to_dict() for r in self.user_records],
            'isBreach': self.is_breach,
            'stats': self.stats.to_dict(),
        }
