"""Output formatters for catalogs and selections."""

from __future__ import annotations

import json
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from maxcalorie.optimizer.models import Foods


class TableFormatter:
    """Format foods as a Rich table for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format(self, foods: Foods, title: Optional[str] = None) -> None:
        """Print a formatted table to the console.

        Args:
            foods: Catalog or selection to display
            title: Optional table title
        """
        if len(foods) == 0:
            self.console.print("[dim]\\[empty food list][/dim]")
            return

        table = Table(title=title)
        table.add_column("Food", style="cyan", max_width=50)
        table.add_column("Weight (oz)", justify="right")
        table.add_column("Calories", justify="right", style="green")
        table.add_column("Cal/oz", justify="right")

        for food in foods:
            table.add_row(
                escape(food.description[:50]),
                f"{food.weight:.2f}",
                f"{food.calories:.1f}",
                f"{food.ratio:.2f}",
            )

        table.add_row(
            "[bold]TOTAL[/bold]",
            f"[bold]{foods.total_weight:.2f}[/bold]",
            f"[bold]{foods.total_calories:.1f}[/bold]",
            "",
            style="bold",
        )

        self.console.print(table)


class JSONFormatter:
    """Format foods as JSON for programmatic use."""

    def format(
        self,
        foods: Foods,
        capacity: Optional[float] = None,
        strategy: Optional[str] = None,
    ) -> str:
        """Return JSON string.

        Args:
            foods: Catalog or selection to format
            capacity: Weight limit the selection was solved for, if any
            strategy: Solver name ("greedy" or "exhaustive"), if any

        Returns:
            JSON string
        """
        data = {
            "strategy": strategy,
            "capacity": capacity,
            "items": [
                {
                    "description": f.description,
                    "weight": f.weight,
                    "calories": f.calories,
                }
                for f in foods
            ],
            "count": len(foods),
            "total_weight": foods.total_weight,
            "total_calories": foods.total_calories,
        }
        return json.dumps(data, indent=2)


class TextFormatter:
    """Plain text listing, one line per food followed by grand totals."""

    def format(self, foods: Foods) -> str:
        lines = ["*** food Vector ***"]

        if len(foods) == 0:
            lines.append("[empty food list]")
        else:
            for food in foods:
                lines.append(
                    f"Ye olde {food.description} ==> "
                    f"Weight of {food.weight:g} ounces; calories = {food.calories:g}"
                )
            lines.append(f"> Grand total weight: {foods.total_weight:g} ounces")
            lines.append(f"> Grand total calories: {foods.total_calories:g}")

        return "\n".join(lines)


def format_foods(
    foods: Foods,
    output_format: str = "table",
    title: Optional[str] = None,
    capacity: Optional[float] = None,
    strategy: Optional[str] = None,
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a catalog or selection in the specified format.

    Args:
        foods: Catalog or selection to format
        output_format: One of 'table', 'json', 'text'
        title: Table title (table format)
        capacity: Weight limit (json format)
        strategy: Solver name (json format)
        console: Rich console (for table format)

    Returns:
        Formatted string for json/text, None for table (prints directly)
    """
    if output_format == "table":
        formatter = TableFormatter(console)
        formatter.format(foods, title)
        return None
    elif output_format == "json":
        return JSONFormatter().format(foods, capacity=capacity, strategy=strategy)
    elif output_format == "text":
        return TextFormatter().format(foods)
    else:
        raise ValueError(f"Unknown output format: {output_format}")
