"""
CLI 공통 도우미

명령어마다 반복되는 팩토리 생성, 세션 시작/종료, 출력 형식을 모아둡니다.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from adapters.factory import AdapterFactory, get_adapter_factory
from core.domain.entities import MessageSummary, SelectedMessage, SelectionStatus
from core.usecases.temp_mail_session import TempMailSession

console = Console()


@asynccontextmanager
async def open_session(factory: Optional[AdapterFactory] = None) -> AsyncIterator[TempMailSession]:
    """저장된 세션을 복원한 임시 메일 세션을 열고, 종료 시 자원을 정리합니다."""
    factory = factory or get_adapter_factory()
    try:
        session = await factory.create_temp_mail_session()
        async with session:
            yield session
    finally:
        await factory.close()


def print_notices(session: TempMailSession) -> None:
    """백그라운드 알림을 출력합니다."""
    for notice in session.notices:
        console.print(f"[yellow]알림: {notice}[/yellow]")
    session.dismiss_notices()


def build_messages_table(messages: List[MessageSummary], selected_id: Optional[str] = None) -> Table:
    """메시지 목록 테이블을 생성합니다."""
    table = Table(title="받은편지함")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("보낸 사람", style="green")
    table.add_column("제목")
    table.add_column("미리보기", style="dim")
    table.add_column("수신 시간", style="magenta")

    for message in messages:
        marker = "▶ " if message.id == selected_id else ""
        received = message.created_at.strftime("%H:%M:%S") if message.created_at else "-"
        table.add_row(
            f"{marker}{message.id}",
            message.sender_display(),
            message.subject_display(),
            message.intro or "",
            received,
        )

    return table


def render_message(selected: SelectedMessage) -> None:
    """선택된 메시지를 출력합니다."""
    if selected.status == SelectionStatus.LOADING:
        console.print("[blue]불러오는 중...[/blue]")
        return

    if selected.status == SelectionStatus.ERROR:
        console.print(f"[red]{selected.error}[/red]")
        return

    recipients = ", ".join(r.address for r in selected.to) or "-"
    received = selected.created_at.isoformat() if selected.created_at else "-"

    console.print(f"[bold]From:[/bold] {selected.sender.name or selected.sender.address}")
    console.print(f"[bold]To:[/bold] {recipients}")
    console.print(f"[bold]Subject:[/bold] {selected.subject_display()}")
    console.print(f"[dim]{received}[/dim]")

    kind, content = selected.body()
    if kind == "empty":
        console.print(f"[dim]{content}[/dim]")
    else:
        console.print(Panel(content, title=kind.upper()))
