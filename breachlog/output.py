"""Breach Log Analyzer - Report output"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .models import AnalysisResult
from .patterns import VERDICTS

FILE_SIZE_UNITS = ['Bytes', 'KB', 'MB', 'GB']


def format_file_size(size: int) -> str:
    """Human readable size using 1024 steps, e.g. 1536 -> '1.5 KB'"""
    if size <= 0:
        return '0 Bytes'
    exponent = 0
    while size >= 1024 ** (exponent + 1) and exponent < len(FILE_SIZE_UNITS) - 1:
        exponent += 1
    value = round(size / 1024 ** exponent, 2)
    return f"{value:g} {FILE_SIZE_UNITS[exponent]}"


def print_stats(result: AnalysisResult, console: Console):
    stats = result.stats
    console.print(Panel.fit(
        f"Log Blocks: [cyan]{stats.total_blocks:,}[/]\n"
        f"Unique IPs: [cyan]{stats.total_ips:,}[/]\n"
        f"Internal IPs: [green]{stats.internal_ips:,}[/]\n"
        f"External IPs: [{'red' if stats.external_ips > 0 else 'green'}]{stats.external_ips:,}[/]\n"
        f"Suspicious Users: [{'red' if stats.suspicious_users > 0 else 'green'}]{stats.suspicious_users:,}[/]",
        title="Summary",
        border_style="cyan"
    ))


def print_ip_analysis(result: AnalysisResult, console: Console):
    console.print("\n" + "─" * 70, style="cyan")
    console.print("IP ANALYSIS", style="bold")
    if not result.ip_records:
        console.print("  No IP addresses found in log", style="dim")
        return

    table = Table(box=box.ROUNDED)
    table.add_column("IP Address", style="cyan")
    table.add_column("Origin")
    table.add_column("Requests", style="white")
    for record in result.ip_records:
        origin = "[green]Internal[/]" if record.is_internal else "[red]External[/]"
        table.add_row(record.address, origin, str(len(record.request_lines)))
    console.print(table)


def print_user_analysis(result: AnalysisResult, console: Console):
    console.print("\n" + "─" * 70, style="cyan")
    console.print("USER BEHAVIOR", style="bold")
    if not result.user_records:
        console.print("  No user activity detected", style="dim")
        return

    table = Table(box=box.ROUNDED)
    table.add_column("User", style="cyan")
    table.add_column("Details", style="white")
    table.add_column("Status")
    for record in result.user_records:
        status = "[red]Suspicious[/]" if record.is_suspicious else "[green]Normal[/]"
        table.add_row(record.user_id, f"{record.reason} ({record.request_count} requests)", status)
    console.print(table)


def print_verdict(result: AnalysisResult, console: Console):
    verdict = VERDICTS[result.is_breach]
    console.print()
    console.print(Panel.fit(
        f"[bold]{verdict['title']}[/]\n{verdict['description']}",
        title="Verdict",
        border_style=verdict['style']
    ))


def print_report(result: AnalysisResult, console: Console):
    console.print("\n" + "═" * 70, style="cyan")
    console.print("              BREACH LOG ANALYZER REPORT", style="bold cyan")
    console.print("═" * 70, style="cyan")

    print_stats(result, console)
    print_ip_analysis(result, console)
    print_user_analysis(result, console)
    print_verdict(result, console)

    console.print("\n" + "═" * 70, style="cyan")


def print_error(message: str, console: Console):
    console.print(Panel.fit(f"[bold]Error:[/] {message}", border_style="red"))
