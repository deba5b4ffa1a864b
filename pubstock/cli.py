# pubstock/cli.py
import logging
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from . import config
from .collection import get_collection
from .events import Notification
from .filters import ALL_CATEGORIES
from .models import CATEGORIES, CATEGORY_LABELS, Product
from .state import (
    ViewState, reduce, SetSearch, SetCategory, SetLowStockOnly, ClearFilters,
    OpenAdd, OpenEdit, EditDraft, CloseModal,
)
from .stock import InventoryStats, is_low_stock
from .store import InventoryStore

console = Console()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})

STATUS_STYLES = {"success": "green", "error": "red", "info": "yellow"}


# ---------------------------
# Display helpers
# ---------------------------
def show_status(note: Notification):
    style = STATUS_STYLES.get(note.level, "white")
    console.print(Panel.fit(f"[{style}]{note.message}[/{style}]", title="Status"))


def show_stats(stats: InventoryStats):
    low_style = "red" if stats.low_stock else "green"
    grid = Table.grid(padding=(0, 4))
    for _ in range(4):
        grid.add_column(justify="center")
    grid.add_row(
        f"[bold blue]{stats.total}[/bold blue]",
        f"[bold {low_style}]{stats.low_stock}[/bold {low_style}]",
        f"[bold cyan]{stats.filtered}[/bold cyan]",
        f"[bold yellow]£{stats.stock_value:.2f}[/bold yellow]",
    )
    grid.add_row("[dim]Total Products[/dim]", "[dim]Low Stock[/dim]", "[dim]Filtered[/dim]", "[dim]Stock Value[/dim]")
    console.print(Panel(grid, border_style="blue"))


def show_filters(view: ViewState):
    category = "All Categories" if view.category == ALL_CATEGORIES else CATEGORY_LABELS.get(view.category, view.category)
    console.print(
        f"[dim]Search:[/dim] {view.search_term or '-'}   "
        f"[dim]Category:[/dim] {category}   "
        f"[dim]Low stock only:[/dim] {'yes' if view.low_stock_only else 'no'}"
    )


def show_products(store: InventoryStore, visible: List[Product]):
    if store.error:
        console.print(Panel(f"[red]{store.error}[/red]", border_style="red"))
        return

    if not visible:
        hint = "Add your first product to get started!" if not store.products else "Try changing your filters"
        console.print(Panel(f"📭 [bold]No products found[/bold]\n[dim]{hint}[/dim]", border_style="yellow"))
        return

    table = Table(
        title="📦 Pub Inventory",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Product", style="bold", width=24)
    table.add_column("Category", width=10)
    table.add_column("Quantity", justify="right", width=9)
    table.add_column("Min Threshold", justify="right", width=9)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Status", width=10)

    for p in visible:
        low = is_low_stock(p)
        qty = f"[bold red]{p.quantity}[/bold red]" if low else str(p.quantity)
        status = "[white on red] Low Stock [/white on red]" if low else "[white on green] In Stock [/white on green]"
        table.add_row(
            str(p.id),
            p.display_name,
            p.category or "N/A",
            qty,
            str(p.min_threshold),
            p.display_price,
            status,
            style="on grey15" if low else None,
        )
    console.print(table)


def show_footer(stats: InventoryStats):
    line = f"PubStock Manager • {stats.filtered} of {stats.total} products shown"
    if stats.low_stock:
        line += f" [red]• {stats.low_stock} need restocking[/red]"
    console.print(f"[dim]{line}[/dim]")


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🍺 PubStock Manager",
        "[bold blue]Inventory management for pubs and bars[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def busy(fn, *args, **kwargs):
    """Run fn with a spinner; the store reports outcomes on the notification bus.

    Anything the store does not handle is shown as an error status and the
    menu carries on.
    """
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            return fn(*args, **kwargs)
    except Exception as e:
        logging.getLogger("pubstock").exception("Unexpected error")
        show_status(Notification("error", f"Error: {e}"))
        return None


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_price(message: str, default: Decimal) -> Decimal:
    while True:
        raw = Prompt.ask(message, default=f"{default:.2f}")
        try:
            value = Decimal(raw)
        except InvalidOperation:
            console.print("[red]Please enter a valid number.[/red]")
            continue
        if value < 0:
            console.print("[red]Price cannot be negative.[/red]")
            continue
        return value.quantize(Decimal("0.01"))


def category_completer(with_all: bool = False):
    words = list(CATEGORIES)
    if with_all:
        words.insert(0, ALL_CATEGORIES)
    return WordCompleter(words, ignore_case=True)


def fill_form(view: ViewState) -> ViewState:
    draft = view.draft
    name = prompt_with_autocomplete("Product name *", default=draft.name)
    quantity = IntPrompt.ask("📦 Quantity", default=draft.quantity)
    min_threshold = IntPrompt.ask("Min threshold", default=draft.min_threshold)
    category = prompt_with_autocomplete("🏷️ Category", completer=category_completer(), default=draft.category).strip()
    price = ask_price("💰 Price (£)", default=draft.price)
    return reduce(view, EditDraft(changes={
        "name": name,
        "quantity": quantity,
        "min_threshold": min_threshold,
        "category": category or "other",
        "price": price,
    }))


def choose_product(visible: List[Product]) -> Optional[Product]:
    by_key = {}
    for p in visible:
        by_key[str(p.id)] = p
        if p.name:
            by_key.setdefault(p.name.lower(), p)
    completer = WordCompleter([p.name for p in visible if p.name] + [str(p.id) for p in visible], ignore_case=True)
    raw = prompt_with_autocomplete("Product (name or ID)", completer=completer).strip()
    product = by_key.get(raw) or by_key.get(raw.lower())
    if product is None:
        console.print(f"[yellow]No product matching '{raw}'[/yellow]")
    return product


# ---------------------------
# Main menu
# ---------------------------
def menu(store: InventoryStore):
    view = ViewState()

    console.clear()
    console.print(create_header())
    busy(store.load)

    while True:
        visible = view.visible(store.products)
        stats = store.stats(visible)

        show_stats(stats)
        show_filters(view)
        show_products(store, visible)
        show_footer(stats)

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "🔍 Search products", "6", "✏️ Edit product"),
            ("2", "🏷️ Filter by category", "7", "🗑️ Delete product"),
            ("3", "⚠️ Toggle low stock only", "8", "📋 Generate supplier order"),
            ("4", "🧹 Clear filters", "9", "🔄 Reload"),
            ("5", "➕ Add product", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 10)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            term = prompt_with_autocomplete("Search products", default=view.search_term)
            view = reduce(view, SetSearch(term=term))

        elif choice == "2":
            category = prompt_with_autocomplete(
                "Category (all for every category)",
                completer=category_completer(with_all=True),
                default=view.category,
            ).strip()
            view = reduce(view, SetCategory(category=category or ALL_CATEGORIES))

        elif choice == "3":
            view = reduce(view, SetLowStockOnly(enabled=not view.low_stock_only))

        elif choice == "4":
            view = reduce(view, ClearFilters())

        elif choice == "5":
            view = fill_form(reduce(view, OpenAdd()))
            if not view.draft.can_submit:
                console.print("[red]Product name is required.[/red]")
            else:
                busy(store.create, view.draft.to_input())
            view = reduce(view, CloseModal())

        elif choice == "6":
            product = choose_product(visible)
            if product is not None:
                view = fill_form(reduce(view, OpenEdit(product=product)))
                if not view.draft.can_submit:
                    console.print("[red]Product name is required.[/red]")
                else:
                    busy(store.update, view.editing_id, view.draft.to_input())
                view = reduce(view, CloseModal())

        elif choice == "7":
            product = choose_product(visible)
            if product is not None:
                confirmed = Confirm.ask("[red]Are you sure you want to delete this product?[/red]")
                busy(store.delete, product.id, confirm=lambda: confirmed)

        elif choice == "8":
            busy(store.export_order, visible, directory=config.ORDER_DIR)

        elif choice == "9":
            busy(store.load)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Cheers! 🍺[/bold green]", title="Goodbye"))
                return

        console.print()
        console.rule(style="dim")


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    try:
        store = InventoryStore(get_collection())
    except RuntimeError as e:
        console.print(f"[bold red]{e}[/bold red]")
        sys.exit(1)
    store.notifications.subscribe(show_status)

    try:
        menu(store)
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
