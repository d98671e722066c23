from __future__ import annotations

import logging

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Label, ListItem, ListView

from models.category import Category
from services.playback_session import PlaybackSession
from styles import COLOR_MUTED
from widgets.track_list import TrackList

logger = logging.getLogger(__name__)


class CategoryItem(ListItem):
    """List row for one category card."""

    def __init__(self, category: Category, *args, **kwargs):
        super().__init__(Label(CategoryItem.render_card(category)), *args, **kwargs)
        self.category = category

    @staticmethod
    def render_card(category: Category) -> Text:
        result = Text()
        result.append(f"{category.icon} ", style=category.color)
        result.append(category.label, style=f"{category.color} bold")
        result.append(f"\n   {category.description}", style=COLOR_MUTED)
        return result


class CategoriesView(Container):
    """Category browser: categories on the left, their tracks on the right."""

    BINDINGS = [
        Binding("j", "move_down", "Move down", show=False),
        Binding("k", "move_up", "Move up", show=False),
    ]

    def __init__(self, session: PlaybackSession, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session
        self.selected_category = Category.FOCUS

    def compose(self) -> ComposeResult:
        with Horizontal(id="categories-layout"):
            with Vertical(id="category-panel"):
                yield Label("Neural Music", classes="view-title")
                yield ListView(
                    *[CategoryItem(category) for category in Category],
                    id="category-list",
                )
            with Vertical(id="category-tracks-panel"):
                yield Label(self.selected_category.label, id="category-tracks-title", classes="view-title")
                yield TrackList(
                    self.session,
                    self.session.catalog.by_category(self.selected_category),
                    id="category-track-list",
                )

    async def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        """Show the tracks of the highlighted category."""
        if event.list_view.id != "category-list" or not isinstance(event.item, CategoryItem):
            return

        category = event.item.category
        if category == self.selected_category:
            return

        self.selected_category = category
        self.query_one("#category-tracks-title", Label).update(category.label)
        track_list = self.query_one("#category-track-list", TrackList)
        await track_list.set_tracks(self.session.catalog.by_category(category))
        logger.debug(f"Showing category {category.label}")

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Enter on a category moves focus to its tracks."""
        if event.list_view.id == "category-list":
            self.query_one("#category-track-list", TrackList).focus()

    def refresh_rows(self) -> None:
        self.query_one("#category-track-list", TrackList).refresh_rows()

    def focus_list(self) -> None:
        self.query_one("#category-list", ListView).focus()

    def action_move_down(self) -> None:
        list_view = self.query_one("#category-list", ListView)
        list_view.action_cursor_down()

    def action_move_up(self) -> None:
        list_view = self.query_one("#category-list", ListView)
        list_view.action_cursor_up()
