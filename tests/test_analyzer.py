import pytest
from rich.console import Console

from breachlog import (
    DEFAULT_POLICY,
    AnalyzerError,
    LogAnalyzer,
    UnreadableInputError,
    analyze,
    determine_breach,
    read_log_file,
)
from breachlog.models import IPRecord, UserActivityRecord

POLLING_LOG = """10.0.0.5 - session start
[2024-01-15 10:00:00] GET /api/status?user_id=bot42
[2024-01-15 10:00:05] GET /api/status?user_id=bot42
[2024-01-15 10:00:10] GET /api/status?user_id=bot42

10.0.0.7 - session start
[2024-01-15 10:00:15] GET /api/status?user_id=bot42
[2024-01-15 10:01:00] GET /home?user_id=alice

10.0.0.5 - repeated session
GET /ignored
"""

SAFE_LOG = """10.0.0.1 - session
[2024-01-15 09:00:00] GET /home?user_id=alice
[2024-01-15 09:03:10] GET /profile?user_id=alice

10.20.30.40 - session
[2024-01-15 09:05:00] GET /docs?user_id=bob
"""


def test_empty_input():
    result = analyze("")
    assert result.stats.total_blocks == 0
    assert result.ip_records == ()
    assert result.user_records == ()
    assert result.is_breach is False


def test_all_internal_normal_users_is_safe():
    result = analyze(SAFE_LOG)
    assert result.is_breach is False
    assert result.stats.to_dict() == {
        'totalBlocks': 2,
        'totalIPs': 2,
        'internalIPs': 2,
        'externalIPs': 0,
        'suspiciousUsers': 0,
    }


def test_external_ip_alone_is_a_breach():
    result = analyze(SAFE_LOG + "\n\n192.168.1.20 - session\nGET /\n")
    assert result.stats.external_ips == 1
    assert result.stats.suspicious_users == 0
    assert result.is_breach is True


def test_suspicious_user_alone_is_a_breach():
    result = analyze(POLLING_LOG)
    assert result.stats.external_ips == 0
    assert result.stats.total_blocks == 3
    assert result.stats.total_ips == 2
    assert result.stats.suspicious_users == 1
    assert result.is_breach is True

    bot, alice = result.user_records
    assert bot.user_id == "bot42"
    assert bot.request_count == 4
    assert bot.reason == "Repeated API hits every 5s"
    assert alice.reason == "Normal activity"


def test_analyze_is_idempotent():
    assert analyze(POLLING_LOG) == analyze(POLLING_LOG)
    assert analyze(POLLING_LOG).to_dict() == analyze(POLLING_LOG).to_dict()


def test_determine_breach():
    internal = IPRecord("10.0.0.1", True, ())
    external = IPRecord("8.8.8.8", False, ())
    normal = UserActivityRecord("a", 1, False, "Normal activity")
    suspicious = UserActivityRecord("b", 4, True, "Repeated API hits every 5s", 5)

    assert determine_breach([], []) is False
    assert determine_breach([internal], [normal]) is False
    assert determine_breach([internal, external], [normal]) is True
    assert determine_breach([internal], [normal, suspicious]) is True


def test_to_dict_uses_output_field_names():
    data = analyze(POLLING_LOG).to_dict()
    assert set(data) == {'ipRecords', 'userRecords', 'isBreach', 'stats'}
    assert data['ipRecords'][0] == {
        'address': '10.0.0.5',
        'isInternal': True,
        'requestLines': [
            '[2024-01-15 10:00:00] GET /api/status?user_id=bot42',
            '[2024-01-15 10:00:05] GET /api/status?user_id=bot42',
            '[2024-01-15 10:00:10] GET /api/status?user_id=bot42',
        ],
    }
    assert data['userRecords'][0]['avgIntervalSeconds'] == 5
    assert 'avgIntervalSeconds' not in data['userRecords'][1]


def test_read_log_file(tmp_path):
    path = tmp_path / "access.log"
    path.write_text(SAFE_LOG, encoding="utf-8")
    assert read_log_file(path) == SAFE_LOG


def test_read_log_file_replaces_undecodable_bytes(tmp_path):
    path = tmp_path / "binary.log"
    path.write_bytes(b"10.0.0.1\n\xff\xfe GET /\n")
    content = read_log_file(path)
    assert content.startswith("10.0.0.1\n")
    assert "�" in content


def test_missing_file_is_unreadable(tmp_path):
    missing = tmp_path / "missing.log"
    with pytest.raises(UnreadableInputError) as exc_info:
        read_log_file(missing)
    assert exc_info.value.path == str(missing)
    assert isinstance(exc_info.value, AnalyzerError)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_directory_is_unreadable(tmp_path):
    with pytest.raises(UnreadableInputError):
        LogAnalyzer().analyze_file(tmp_path)


def test_log_analyzer_matches_pure_pipeline(tmp_path):
    path = tmp_path / "access.log"
    path.write_text(POLLING_LOG, encoding="utf-8")

    plain = LogAnalyzer()
    with_progress = LogAnalyzer(console=Console(record=True, width=100))

    assert plain.policy is DEFAULT_POLICY
    assert plain.analyze(POLLING_LOG) == analyze(POLLING_LOG)
    assert with_progress.analyze_file(path) == analyze(POLLING_LOG)
    assert with_progress.analyze_file(path) == plain.analyze_file(path)
