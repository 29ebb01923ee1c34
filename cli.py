# interactive product CLI with autocomplete
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from product_sdk.productstore import ProductClient, DEFAULT_BASE_URL

console = Console()
c = ProductClient(base_url=DEFAULT_BASE_URL)

KNOWN_FIELDS = ("id", "name", "category", "price")

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def _format_price(value: Any) -> str:
    if isinstance(value, (int, float)):
        return f"${value:.2f}"
    return "N/A" if value is None else str(value)


def _format_extra(p: Dict[str, Any]) -> str:
    extra = {k: v for k, v in p.items() if k not in KNOWN_FIELDS}
    return ", ".join(f"{k}={v}" for k, v in extra.items())


def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=8)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Category", width=15)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Other fields", width=30)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            str(p.get("name", "N/A")),
            str(p.get("category", "N/A")),
            _format_price(p.get("price")),
            _format_extra(p),
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Errors are shown in a status panel and turned into a None result.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def refresh_product_cache():
    global product_cache
    product_cache = try_api(c.list_products) or []


def get_product_completer():
    if not product_cache:
        refresh_product_cache()
    ids = [str(p.get("id", "")) for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_category_completer():
    categories = {str(p.get("category")) for p in product_cache if p.get("category")}
    return WordCompleter(sorted(categories), ignore_case=True)


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Product API",
        "[bold blue]Product Management CLI[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: Optional[float] = None) -> Optional[float]:
    # empty answer with no default means "leave unchanged"
    while True:
        raw = Prompt.ask(message, default="" if default is None else str(default))
        if raw == "" and default is None:
            return None
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_changes() -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    name = prompt_with_autocomplete("New name (blank keeps current)").strip()
    if name:
        fields["name"] = name
    category = prompt_with_autocomplete("New category (blank keeps current)",
                                        completer=get_category_completer()).strip()
    if category:
        fields["category"] = category
    price = ask_float("💰 New price (blank keeps current)")
    if price is not None:
        fields["price"] = price
    return fields


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())

    refresh_product_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "4", "✏️ Update product"),
            ("2", "ℹ️ Get product by ID", "5", "🗑️ Delete product"),
            ("3", "➕ Create product", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 6)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded successfully")
            if products is not None:
                product_cache[:] = products
                show_products(products)

        elif choice == "2":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
            if resp:
                show_products([resp])

        elif choice == "3":
            name = prompt_with_autocomplete("Enter product name")
            category = prompt_with_autocomplete("🏷️ Category", completer=get_category_completer())
            price = ask_float("💰 Price", default=10.0)
            resp = try_api(c.create_product, name, category, price,
                           success_msg=f"Product '{name}' created")
            if resp:
                console.print(Panel(f"Created product: [green]{resp['id']}[/green]"))
                show_products([resp])
                refresh_product_cache()

        elif choice == "4":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            fields = ask_changes()
            if not fields:
                console.print("[yellow]Nothing to update[/yellow]")
                continue
            resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **fields)
            if resp:
                show_products([resp])
                refresh_product_cache()

        elif choice == "5":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                refresh_product_cache()

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
