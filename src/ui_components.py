"""
UI Components module for the Kanji Browser application.

This module contains the widgets the browser window is built from:
round navigation buttons drawn on a canvas and the page view that
renders kanji, word and search result pages with clickable links.
"""

import io
import logging
import tkinter as tk
from typing import Callable, Dict, List, Optional, Tuple

import cairosvg
from PIL import Image, ImageDraw, ImageFilter, ImageTk

from config import config
from models import (
    CharacterView, DictionaryEntry, SearchResultsView, WordView
)
from utils import is_ideograph, kanji_link, summarize_meanings, word_link

logger = logging.getLogger(__name__)


def draw_ellipse_with_gradient(
    border_width: int,
    size: Tuple[int, int],
    thick: int,
    fill: str
) -> Image.Image:
    """
    Create an ellipse image with gradient effect.

    Args:
        border_width: Width of the border
        size: Size of the ellipse (width, height)
        thick: Thickness parameter for the gradient
        fill: Fill color

    Returns:
        PIL Image with gradient ellipse
    """
    mask = Image.new(
        "RGBA",
        (size[0] - border_width, size[1] - border_width),
        (0, 0, 0, 255)
    )
    draw = ImageDraw.Draw(mask)
    draw.ellipse((thick, thick, size[0] - thick, size[1] - thick), fill=fill)
    img = mask.filter(ImageFilter.GaussianBlur(thick // 2))

    mask2 = Image.new('L', (size[0] - border_width, size[1] - border_width), 0)
    draw2 = ImageDraw.Draw(mask2)
    draw2.ellipse(
        (0, 0, size[0] - border_width, size[1] - border_width),
        fill=255
    )
    img.putalpha(mask2)
    return img


def svg_to_pil_image(
    svg_data: str,
    dpi: int = 120,
    output_width: int = 140,
    output_height: int = 140
) -> Image.Image:
    """
    Convert SVG data to PIL Image.

    Args:
        svg_data: SVG data as string
        dpi: DPI for rendering
        output_width: Output width in pixels
        output_height: Output height in pixels

    Returns:
        PIL Image object
    """
    png_data = cairosvg.svg2png(
        bytestring=svg_data.encode(),
        dpi=dpi,
        output_width=output_width,
        output_height=output_height
    )
    return Image.open(io.BytesIO(png_data))


class NavButton:
    """A round back/forward button on the toolbar canvas."""

    def __init__(self, canvas: tk.Canvas, x: int, y: int,
                 size: int, text: str, color: str,
                 click_handler: Optional[Callable] = None):
        """
        Initialize a button.

        Args:
            canvas: Canvas to draw on
            x: X coordinate
            y: Y coordinate
            size: Button size
            text: Button text
            color: Button color
            click_handler: Function to call when clicked
        """
        self.canvas = canvas
        self.x = x
        self.y = y
        self.size = size
        self.text = text
        self.color = color
        self.click_handler = click_handler
        self.enabled = False
        self.tk_image = None
        self.bg_image_id = None
        self.text_id = None
        self._create_button()

    def _create_button(self):
        """Create the button visual elements."""
        self.canvas.create_oval(
            self.x, self.y,
            self.x + self.size, self.y + self.size,
            fill='',
            width=2,
            outline='black'
        )
        self._update_background()
        self.text_id = self.canvas.create_text(
            self.x + self.size // 2,
            self.y + self.size // 2,
            fill=config.colors.text_white,
            font=config.fonts.button,
            text=self.text
        )

    def _update_background(self, color: str = None):
        """Update button background color."""
        if color is None:
            color = self.color if self.enabled else config.colors.fill_disabled

        bg_image = draw_ellipse_with_gradient(
            border_width=2,
            size=(self.size, self.size),
            thick=4,
            fill=color
        )
        self.tk_image = ImageTk.PhotoImage(bg_image)

        if self.bg_image_id:
            self.canvas.delete(self.bg_image_id)

        self.bg_image_id = self.canvas.create_image(
            self.x + 1, self.y + 1,
            image=self.tk_image,
            anchor='nw'
        )
        if self.text_id:
            self.canvas.tag_raise(self.text_id)

    def set_enabled(self, enabled: bool):
        if enabled != self.enabled:
            self.enabled = enabled
            self._update_background()

    def set_hover_color(self, color: str):
        """Set button color for hover state."""
        if self.enabled:
            self._update_background(color)

    def reset_color(self):
        """Reset button to default color."""
        self._update_background()

    def is_clicked(self, event_x: int, event_y: int) -> bool:
        """Check if the point lies on the button."""
        center_x = self.x + self.size // 2
        center_y = self.y + self.size // 2
        distance = ((event_x - center_x) ** 2 + (event_y - center_y) ** 2) ** 0.5
        return distance <= self.size // 2

    def handle_click(self, event_x: int, event_y: int):
        """Handle button click."""
        if self.enabled and self.is_clicked(event_x, event_y) and self.click_handler:
            self.click_handler()


class PageView(tk.Text):
    """Read-only text widget rendering one browser page at a time."""

    def __init__(self, master, link_handler: Callable[[str], None], **kwargs):
        kwargs.setdefault('wrap', tk.WORD)
        kwargs.setdefault('background', config.colors.page_background)
        kwargs.setdefault('foreground', config.colors.text)
        kwargs.setdefault('font', config.fonts.medium)
        kwargs.setdefault('padx', 12)
        kwargs.setdefault('pady', 8)
        super().__init__(master, **kwargs)
        self.link_handler = link_handler
        self._links: Dict[str, str] = {}
        self._images: List[ImageTk.PhotoImage] = []
        self._configure_tags()
        self.configure(state=tk.DISABLED)

    def _configure_tags(self):
        self.tag_configure('kanji', font=config.fonts.kanji)
        self.tag_configure('word', font=config.fonts.word)
        self.tag_configure('heading', font=config.fonts.heading, foreground=config.colors.muted,
                           spacing1=10, spacing3=4)
        self.tag_configure('muted', foreground=config.colors.muted)
        self.tag_configure('small', font=config.fonts.small)
        self.tag_configure('common', foreground=config.colors.common_tag, font=config.fonts.small)
        self.tag_configure('error', foreground=config.colors.error)
        self.tag_configure('link', foreground=config.colors.link)

    # Writing helpers

    def _clear(self):
        self.configure(state=tk.NORMAL)
        self.delete('1.0', tk.END)
        for tag in self._links:
            self.tag_delete(tag)
        self._links = {}
        self._images = []

    def _finish(self):
        self.configure(state=tk.DISABLED)
        self.yview_moveto(0)

    def _write(self, text: str, *tags: str):
        self.insert(tk.END, text, tags)

    def _write_link(self, text: str, url: str, *tags: str):
        tag = f'link-{len(self._links)}'
        self._links[tag] = url
        self.insert(tk.END, text, ('link', tag) + tags)
        self.tag_bind(tag, '<Button-1>', lambda event, u=url: self.link_handler(u))
        self.tag_bind(tag, '<Enter>', lambda event, t=tag: self._hover(t, True))
        self.tag_bind(tag, '<Leave>', lambda event, t=tag: self._hover(t, False))

    def _hover(self, tag: str, inside: bool):
        self.configure(cursor='hand2' if inside else '')
        self.tag_configure(tag, foreground=config.colors.link_hover if inside else config.colors.link)

    def _write_linked_word(self, word: str, *tags: str):
        """Write a word with every kanji in it clickable."""
        for char in word:
            if is_ideograph(char):
                self._write_link(char, kanji_link(char), *tags)
            else:
                self._write(char, *tags)

    def _write_field(self, label: str, values, *tags: str):
        if values:
            self._write(f'{label} ', 'muted')
            self._write('、'.join(values), *tags)
            self._write('\n')

    def _write_stroke_order(self, svg_data: Optional[str]):
        if not svg_data:
            return
        size = config.ui.stroke_image_size
        try:
            image = svg_to_pil_image(svg_data, output_width=size, output_height=size)
        except (ValueError, OSError, SyntaxError) as e:
            logger.warning(f"Could not render stroke order image: {e}")
            return
        tk_image = ImageTk.PhotoImage(image)
        self._images.append(tk_image)
        self.image_create(tk.END, image=tk_image, padx=12)

    # Pages

    def render_search_results(self, view: SearchResultsView):
        self._clear()
        self._write(f'Results for "{view.query}"\n', 'heading')
        if not view.entries:
            self._write('No entry found\n', 'error')
        for entry in view.entries:
            self._render_result_line(entry)
        self._finish()

    def _render_result_line(self, entry: DictionaryEntry):
        if entry.is_reference:
            self._write_link(entry.word, kanji_link(entry.word), 'word')
            self._write(f'  {entry.reading_text}', 'muted')
        else:
            reading = entry.readings[0] if entry.readings else ''
            self._write_link(entry.word, word_link(entry.word, reading))
            if entry.readings:
                self._write(f' ({entry.reading_text})', 'muted')
            if entry.is_common:
                self._write(' common', 'common')
        self._write(f'  {summarize_meanings(entry.meanings)}\n')

    def render_character_view(self, view: CharacterView):
        self._clear()
        entry = view.reference_entry
        self._write(view.character, 'kanji')
        if entry is None:
            self._write('\nNo kanji dictionary entry found\n', 'muted')
        else:
            self._write_stroke_order(entry.stroke_order_svg)
            self._write('\n')
            if entry.grade:
                self._write(f'Grade: {entry.grade}   ', 'small')
            if entry.stroke_count:
                self._write(f'Strokes: {entry.stroke_count}   ', 'small')
            if entry.frequency:
                self._write(f'Frequency: {entry.frequency}   ', 'small')
            if entry.jlpt:
                self._write(f'JLPT: {entry.jlpt}', 'small')
            self._write('\n')
            self._write_field('Onyomi:', entry.onyomi)
            self._write_field('Kunyomi:', entry.kunyomi)
            self._write_field('In names:', entry.nanori)
            self._write_field('As radical:', entry.radical_readings)
            if entry.meanings:
                self._write('Meanings\n', 'heading')
                self._write(entry.meaning_text + '\n')

        if view.compound_candidates:
            self._write('Compound Words\n', 'heading')
            for candidate in view.compound_candidates:
                self._write_link(candidate.word, word_link(candidate.word, candidate.reading))
                if candidate.is_common:
                    self._write(' common', 'common')
                self._write(f' ({candidate.reading})', 'muted')
                self._write(f' {candidate.meaning_summary}\n')
            if view.remaining_count:
                self._write(f'...and {view.remaining_count} more\n', 'muted')
        self._finish()

    def render_word_view(self, view: WordView):
        self._clear()
        entry = view.best_entry
        if entry is None:
            self._write(f'No entry found for "{view.word}"\n', 'error')
            self._finish()
            return

        self._write_linked_word(entry.word, 'word')
        self._write('\n')
        if entry.readings:
            self._write(entry.reading_text + '\n', 'muted')
        if entry.meanings:
            self._write('Meanings\n', 'heading')
            for number, meaning in enumerate(entry.meanings, start=1):
                self._write(f'{number}. {meaning}\n')

        if view.kanji_breakdown:
            self._write('Kanji in this word\n', 'heading')
            for item in view.kanji_breakdown:
                self._write_link(item.character, kanji_link(item.character), 'word')
                reference = item.reference_entry
                if reference is not None:
                    readings = ' / '.join(
                        '、'.join(group) for group in (reference.onyomi, reference.kunyomi) if group
                    )
                    self._write(f' {readings}', 'muted')
                    self._write(f' {reference.meaning_text}')
                    if reference.stroke_count:
                        self._write(f' ({reference.stroke_count} strokes)', 'small')
                self._write('\n')
        self._finish()
