from rich.console import Console
from rich.markup import escape
from rich.table import Table

def get_rich_console() -> Console: return Console(stderr=True)

def record_table(data: dict, title: str | None = None) -> Table:
    """Двухколоночная таблица ключ/значение для вывода записи в консоль."""
    table = Table(title=title, show_header=False)
    table.add_column("field", style="cyan")
    table.add_column("value")
    for key, value in data.items():
        table.add_row(str(key), "" if value is None else escape(str(value)))
    return table
