"""
메일함 관리 CLI 명령어

메일함 생성/재생성, 현재 세션 조회, 초기화, 도메인 목록을 CLI로 노출합니다.
"""

import asyncio

import typer
from rich.table import Table

from .common import console, open_session, print_notices

# CLI 앱 생성
app = typer.Typer(name="mailbox", help="메일함 관리 명령어")


@app.command("new")
def create_mailbox():
    """새 임시 메일함을 생성합니다. 기존 메일함이 있으면 재생성합니다."""

    async def _create():
        async with open_session() as session:
            regenerating = session.session.is_active()
            created = await session.create_mailbox()

            if created is None:
                console.print(f"[red]오류: {session.error}[/red]")
                raise typer.Exit(1)

            action = "재생성" if regenerating else "생성"
            console.print(f"[green]✓ 메일함이 {action}되었습니다![/green]")
            console.print(f"주소: {created.address}")
            console.print(f"비밀번호: {created.password}")

    try:
        asyncio.run(_create())
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]오류: {str(e)}[/red]")
        raise typer.Exit(1)


@app.command("show")
def show_mailbox(
    show_password: bool = typer.Option(False, "--password", help="비밀번호를 함께 표시"),
):
    """현재 메일함 정보를 표시합니다."""

    async def _show():
        async with open_session() as session:
            current = session.session
            if not current.is_active():
                console.print('[yellow]메일함이 없습니다. "mailbox new"로 생성하세요.[/yellow]')
                return

            console.print("[bold]현재 메일함[/bold]")
            console.print(f"주소: {current.address}")
            if show_password:
                console.print(f"비밀번호: {current.password}")
            if isinstance(current.account, dict) and current.account:
                console.print(f"계정 ID: {current.account.get('id', 'N/A')}")
            print_notices(session)

    try:
        asyncio.run(_show())
    except Exception as e:
        console.print(f"[red]오류: {str(e)}[/red]")
        raise typer.Exit(1)


@app.command("clear")
def clear_mailbox(
    force: bool = typer.Option(False, "--force", "-f", help="확인 없이 삭제"),
):
    """현재 메일함 세션을 삭제합니다."""

    if not force:
        confirm = typer.confirm("현재 메일함 세션이 삭제됩니다. 계속하시겠습니까?")
        if not confirm:
            console.print("[yellow]취소되었습니다.[/yellow]")
            return

    async def _clear():
        async with open_session() as session:
            await session.clear()
            console.print("[green]✓ 메일함 세션이 삭제되었습니다.[/green]")

    try:
        asyncio.run(_clear())
    except Exception as e:
        console.print(f"[red]오류: {str(e)}[/red]")
        raise typer.Exit(1)


@app.command("domains")
def list_domains():
    """사용 가능한 메일함 도메인 목록을 조회합니다."""

    async def _domains():
        async with open_session() as session:
            if not session.domains:
                console.print("[yellow]사용 가능한 도메인이 없습니다.[/yellow]")
                return

            table = Table(title="도메인 목록")
            table.add_column("도메인", style="cyan")
            for domain in session.domains:
                table.add_row(domain.name)
            console.print(table)

    try:
        asyncio.run(_domains())
    except Exception as e:
        console.print(f"[red]오류: {str(e)}[/red]")
        raise typer.Exit(1)
