"""
데이터베이스 관리 CLI 명령어

세션이 저장되는 로컬 데이터베이스의 초기화, 리셋, 상태 조회 명령어입니다.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

import typer
from rich.table import Table

from adapters.db.database import DatabaseAdapter, initialize_database
from config.adapters import get_config

from .common import console

# CLI 앱 생성
app = typer.Typer(name="db", help="세션 저장 데이터베이스 관리 명령어")


@asynccontextmanager
async def _database() -> AsyncIterator[DatabaseAdapter]:
    database = initialize_database(get_config())
    await database.initialize()
    try:
        yield database
    finally:
        await database.close()


def _run(coro) -> None:
    try:
        asyncio.run(coro)
    except Exception as e:
        console.print(f"[red]오류: {str(e)}[/red]")
        raise typer.Exit(1)


@app.command("init")
def init_database():
    """client_state 테이블을 생성합니다."""

    async def _init():
        async with _database() as database:
            await database.create_tables()
        console.print(f"[green]✓ 데이터베이스가 준비되었습니다: {database.database_url}[/green]")

    _run(_init())


@app.command("reset")
def reset_database(
    force: bool = typer.Option(False, "--force", "-f", help="확인 없이 리셋"),
):
    """저장된 메일함 세션을 포함한 모든 클라이언트 상태를 삭제합니다."""

    if not force and not typer.confirm("저장된 메일함 세션이 삭제됩니다. 계속하시겠습니까?"):
        console.print("[yellow]취소되었습니다.[/yellow]")
        return

    async def _reset():
        async with _database() as database:
            await database.reset()
        console.print("[green]✓ 데이터베이스를 리셋했습니다.[/green]")

    _run(_reset())


@app.command("status")
def show_status():
    """저장된 상태 키 목록을 표시합니다. 값은 출력하지 않습니다."""

    async def _status():
        async with _database() as database:
            await database.create_tables()
            records = await database.list_state_records()

        if not records:
            console.print("[dim]저장된 상태가 없습니다.[/dim]")
            return

        table = Table(title="저장된 클라이언트 상태")
        table.add_column("키", style="cyan")
        table.add_column("수정 시간", style="magenta")
        for record in records:
            table.add_row(record.key, record.updated_at.isoformat() if record.updated_at else "-")
        console.print(table)

    _run(_status())
