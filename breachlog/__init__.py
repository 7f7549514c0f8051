"""Breach Log Analyzer package"""

from .patterns import VERSION
from .config import DetectionPolicy, DEFAULT_POLICY
from .exceptions import AnalyzerError, UnreadableInputError
from .models import IPRecord, UserActivityRecord, AnalysisStats, AnalysisResult
from .analyzer import (
    LogAnalyzer,
    analyze,
    analyze_ips,
    analyze_user_behavior,
    determine_breach,
    extract_timestamp,
    read_log_file,
    split_blocks,
)
from .output import print_report, format_file_size

__all__ = [
    'VERSION', 'DetectionPolicy', 'DEFAULT_POLICY', 'AnalyzerError', 'UnreadableInputError',
    'IPRecord', 'UserActivityRecord', 'AnalysisStats', 'AnalysisResult', 'LogAnalyzer',
    'analyze', 'analyze_ips', 'analyze_user_behavior', 'determine_breach', 'extract_timestamp',
    'read_log_file', 'split_blocks', 'print_report', 'format_file_size',
]
