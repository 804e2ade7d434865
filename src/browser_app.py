"""
Main application class for the Kanji Browser.

This module contains the browser window. It forwards user actions to
the page controller and renders whatever page the controller hands
back, acting as the controller's presentation sink.
"""

import logging
import sqlite3
import tkinter as tk

from config import config
from controller import PageController
from database import DictionaryDatabase
from errors import OracleFailure
from models import CharacterView, NavigationState, SearchResultsView, WordView
from ui_components import NavButton, PageView

logger = logging.getLogger(__name__)


class KanjiBrowserApp:
    """Main application class for the Kanji Browser."""

    def __init__(self, database: DictionaryDatabase = None):
        """
        Initialize the application.

        Args:
            database: Dictionary to browse, the configured one if not given
        """
        # Initialize database
        self.database = database or DictionaryDatabase()
        self.settings = self.database.load_settings()
        self.last_query = self.settings.get('last_query') or ''

        self.controller = PageController(self.database, self)

        # Initialize UI
        self._setup_window()
        self._setup_ui()
        self._setup_event_handlers()

        if self.last_query:
            self.search(self.last_query)

    def _setup_window(self):
        """Setup the main window."""
        self.root = tk.Tk()
        self.root.title(config.ui.title)
        self.root.config(bg=config.colors.background)
        self.root.geometry(
            f"{config.ui.window_width}x{config.ui.window_height}"
            f"+{self.settings.get('window_x') or 0}+{self.settings.get('window_y') or 0}"
        )
        self.root.protocol('WM_DELETE_WINDOW', self.quit)

    def _setup_ui(self):
        """Setup the user interface."""
        toolbar = tk.Frame(self.root, bg=config.colors.background)
        toolbar.pack(side=tk.TOP, fill=tk.X)

        size = config.ui.nav_button_size
        self.nav_canvas = tk.Canvas(
            toolbar,
            width=2 * size + 24,
            height=config.ui.toolbar_height,
            bg=config.colors.background,
            highlightthickness=0
        )
        self.nav_canvas.pack(side=tk.LEFT)
        top = (config.ui.toolbar_height - size) // 2
        self.back_button = NavButton(
            self.nav_canvas, 6, top, size, "<", config.colors.fill_green, self.back
        )
        self.forward_button = NavButton(
            self.nav_canvas, size + 18, top, size, ">", config.colors.fill_green, self.forward
        )

        self.search_var = tk.StringVar(value=self.last_query)
        self.search_entry = tk.Entry(toolbar, textvariable=self.search_var, font=config.fonts.medium)
        self.search_entry.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=6)
        tk.Button(toolbar, text="Search", command=self._submit).pack(side=tk.LEFT, padx=2)
        tk.Button(toolbar, text="Clipboard", command=self.search_clipboard).pack(side=tk.LEFT, padx=(2, 6))

        self.status_var = tk.StringVar()
        self.status = tk.Label(
            self.root,
            textvariable=self.status_var,
            anchor=tk.W,
            bg=config.colors.background,
            font=config.fonts.small
        )
        self.status.pack(side=tk.BOTTOM, fill=tk.X)

        body = tk.Frame(self.root)
        body.pack(side=tk.TOP, fill=tk.BOTH, expand=True)
        self.page = PageView(body, link_handler=self.open_link)
        scrollbar = tk.Scrollbar(body, command=self.page.yview)
        self.page.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self.page.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        self._create_menu()

    def _create_menu(self):
        """Create the context menu."""
        self.menu = tk.Menu(self.root, tearoff=0)
        self.menu.add_command(label="Back", command=self.back)
        self.menu.add_command(label="Forward", command=self.forward)
        self.menu.add_command(label="Search clipboard", command=self.search_clipboard)
        self.menu.add_separator()
        self.menu.add_command(label="Quit", command=self.quit)
        self.menu.add_command(label="Cancel", command=self.menu.unpost)

    def _setup_event_handlers(self):
        """Setup event handlers."""
        self.search_entry.bind("<Return>", self._submit)
        self.root.bind("<Alt-Left>", self.back)
        self.root.bind("<Alt-Right>", self.forward)
        self.page.bind("<Button-3>", self._do_popup)
        self.nav_canvas.bind("<Button-1>", self._on_canvas_click)
        self.nav_canvas.bind("<Motion>", self._on_canvas_motion)
        self.nav_canvas.bind("<Leave>", self._reset)

    def _do_popup(self, event):
        """Show context menu."""
        nav = self.controller.navigation_state()
        self.menu.entryconfigure("Back", state=tk.NORMAL if nav.can_go_back else tk.DISABLED)
        self.menu.entryconfigure("Forward", state=tk.NORMAL if nav.can_go_forward else tk.DISABLED)
        try:
            self.menu.post(event.x_root, event.y_root)
        finally:
            self.menu.grab_release()

    def _on_canvas_click(self, event):
        """Handle toolbar canvas clicks."""
        self.back_button.handle_click(event.x, event.y)
        self.forward_button.handle_click(event.x, event.y)

    def _on_canvas_motion(self, event):
        """Handle canvas mouse motion for button hover effects."""
        for button in (self.back_button, self.forward_button):
            if button.is_clicked(event.x, event.y):
                button.set_hover_color(config.colors.fill_yellow)
            else:
                button.reset_color()

    def _reset(self, *args):
        """Reset button states."""
        self.back_button.reset_color()
        self.forward_button.reset_color()

    def _run(self, action, *args):
        """Run a controller action, reporting dictionary failures in the status bar."""
        try:
            action(*args)
        except OracleFailure as e:
            logger.exception("Dictionary lookup failed")
            self.status.configure(fg=config.colors.error)
            self.status_var.set(str(e))

    def _set_status(self, text: str):
        self.status.configure(fg=config.colors.text)
        self.status_var.set(text)

    # User actions

    def _submit(self, *args):
        query = self.search_var.get().strip()
        if query:
            self.search(query)

    def search(self, query: str):
        """Start a fresh search from the search bar."""
        self.last_query = query
        self._run(self.controller.search_submitted, query)

    def search_clipboard(self, *args):
        self._run(self.controller.search_clipboard)

    def open_link(self, url: str):
        self._run(self.controller.follow_link, url)

    def back(self, *args):
        self._run(self.controller.back_requested)

    def forward(self, *args):
        self._run(self.controller.forward_requested)

    # Presentation sink

    def show_search_results(self, view: SearchResultsView, nav: NavigationState):
        self.page.render_search_results(view)
        self.search_var.set(view.query)
        self._set_status(f"{len(view.entries)} results")
        self.update_navigation(nav)

    def show_character_view(self, view: CharacterView, nav: NavigationState):
        self.page.render_character_view(view)
        self._set_status(f"Kanji {view.character}")
        self.update_navigation(nav)

    def show_word_view(self, view: WordView, nav: NavigationState):
        self.page.render_word_view(view)
        self._set_status(f"Word {view.word}")
        self.update_navigation(nav)

    def update_navigation(self, nav: NavigationState):
        self.back_button.set_enabled(nav.can_go_back)
        self.forward_button.set_enabled(nav.can_go_forward)

    # Lifecycle

    def quit(self):
        """Save window state and quit the application."""
        if self.root.winfo_exists():
            try:
                self.database.update_settings(
                    self.root.winfo_x(), self.root.winfo_y(), self.last_query
                )
            except sqlite3.Error as e:
                logger.warning(f"Could not save settings: {e}")
            self.root.destroy()

    def run(self):
        """Start the application main loop."""
        self.root.mainloop()
