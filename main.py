"""
임시 메일 클라이언트

메인 진입점 파일입니다.
"""

import typer
from rich.console import Console

from adapters.cli.db_commands import app as db_app
from adapters.cli.inbox_commands import app as inbox_app
from adapters.cli.mailbox_commands import app as mailbox_app
from config.adapters import get_config

# 메인 CLI 앱
app = typer.Typer(
    name="tempmail",
    help="임시 메일함 클라이언트",
    no_args_is_help=True,
)

# 서브 명령어 추가
app.add_typer(mailbox_app, name="mailbox")
app.add_typer(inbox_app, name="inbox")
app.add_typer(db_app, name="db")

console = Console()


@app.command("version")
def show_version():
    """버전 정보를 표시합니다."""
    console.print("[bold]임시 메일함 클라이언트[/bold]")
    console.print("버전: 1.0.0")


@app.command("config")
def show_config():
    """현재 설정을 표시합니다."""
    try:
        config = get_config()
        backend = config.get_backend_config()

        console.print("[bold]현재 설정[/bold]")
        console.print(f"환경: {config.get_environment()}")
        console.print(f"디버그 모드: {config.is_debug()}")
        console.print(f"백엔드 URL: {backend['base_url']}")
        console.print(f"요청 타임아웃(초): {backend['timeout']}")
        console.print(f"폴링 간격(초): {backend['poll_interval_seconds']}")
        console.print(f"백그라운드 오류 알림: {config.should_notify_background_errors()}")
        console.print(f"데이터베이스 URL: {config.get_database_url()}")
        console.print(f"세션 키: {config.get_session_key()}")
        console.print(f"로그 레벨: {config.get_log_level()}")

    except Exception as e:
        console.print(f"[red]오류: {str(e)}[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
