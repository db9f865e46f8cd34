"""
받은편지함 CLI 명령어

메시지 목록 조회, 메시지 읽기, 주기적 감시를 CLI로 노출합니다.
"""

import asyncio

import typer

from .common import (
    build_messages_table,
    console,
    open_session,
    print_notices,
    render_message,
)

# CLI 앱 생성
app = typer.Typer(name="inbox", help="받은편지함 명령어")


@app.command("list")
def list_messages():
    """받은편지함 메시지 목록을 조회합니다."""

    async def _list():
        async with open_session() as session:
            if not session.session.is_active():
                console.print('[yellow]메일함이 없습니다. "mailbox new"로 생성하세요.[/yellow]')
                return

            messages = await session.refresh()
            print_notices(session)

            if not messages:
                console.print("[dim]아직 메시지가 없습니다. 이 주소로 메일을 보내 보세요.[/dim]")
                return

            console.print(build_messages_table(messages))

    try:
        asyncio.run(_list())
    except Exception as e:
        console.print(f"[red]오류: {str(e)}[/red]")
        raise typer.Exit(1)


@app.command("read")
def read_message(
    message_id: str = typer.Argument(..., help="읽을 메시지 ID"),
):
    """메시지 본문을 조회합니다."""

    async def _read():
        async with open_session() as session:
            if not session.session.is_active():
                console.print('[yellow]메일함이 없습니다. "mailbox new"로 생성하세요.[/yellow]')
                raise typer.Exit(1)

            await session.refresh()
            selected = await session.select(message_id)
            render_message(selected)

    try:
        asyncio.run(_read())
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]오류: {str(e)}[/red]")
        raise typer.Exit(1)


@app.command("watch")
def watch_inbox(
    cycles: int = typer.Option(0, help="폴링 횟수 (0이면 중단할 때까지)"),
):
    """받은편지함을 주기적으로 새로 고치며 변경 사항을 출력합니다."""

    async def _watch():
        async with open_session() as session:
            if not session.session.is_active():
                console.print('[yellow]메일함이 없습니다. "mailbox new"로 생성하세요.[/yellow]')
                raise typer.Exit(1)

            console.print(f"[blue]{session.session.address} 감시 중 (Ctrl+C로 종료)[/blue]")
            interval = session.poller.interval
            seen = None
            count = 0

            while cycles == 0 or count < cycles:
                messages = await session.refresh()
                ids = [m.id for m in messages]
                if ids != seen:
                    console.print(build_messages_table(messages))
                    seen = ids
                print_notices(session)

                count += 1
                if cycles == 0 or count < cycles:
                    await asyncio.sleep(interval)

    try:
        asyncio.run(_watch())
    except KeyboardInterrupt:
        console.print("[yellow]감시를 종료합니다.[/yellow]")
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]오류: {str(e)}[/red]")
        raise typer.Exit(1)
