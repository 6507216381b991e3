"""
Magnify Dock - A dock of icons with hover magnification and drag-and-drop reordering.

This module provides the dock window: a frameless, translucent strip of item
tiles centred at the bottom of the screen. Hovering an item grows and lifts it,
with its neighbours following by a decaying falloff. Items are reordered by
dragging them onto another slot.

Features:
- Hover magnification and lift driven by the proximity module
- Drag-and-drop reordering:
    * The dragged tile collapses into a shrinking placeholder
    * A gap opens in front of the slot under the pointer
    * Dropping outside the dock or cancelling restores the previous order
- Delayed tooltips shown above the hovered item
- Animated transitions for every size, lift and gap change
- Customizable appearance and sizing through settings.json

Configuration:
    items.json - Defines the dock items with their names and icons
    settings.json - Stores sizing, animation and appearance settings

Usage:
    python dock.py

Author: Magnify Dock contributors
License: MIT
"""

import json
import sys
import zlib
from pathlib import Path

from PyQt6.QtWidgets import (
    QApplication, QWidget, QHBoxLayout, QLayout, QMessageBox, QSizePolicy,
    QToolButton, QToolTip
)
from PyQt6.QtCore import (
    Qt, QTimer, QPoint, QRectF, QMimeData, QPropertyAnimation, QEasingCurve,
    pyqtSignal, pyqtProperty
)
from PyQt6.QtGui import QPainter, QColor, QIcon, QFont, QDrag

from dock_state import DockItem, DockOrderState
from proximity import compute_edge_margin, compute_transform

__version__ = "0.1.0"

# File constants
SETTINGS_FILE = "settings.json"
ITEMS_FILE = "items.json"

DOCK_ITEM_MIME_TYPE = "application/x-magnify-dock-item"

# Material primaries, one picked per item name
TILE_COLORS = [
    "#F44336", "#E91E63", "#9C27B0", "#673AB7", "#3F51B5", "#2196F3",
    "#03A9F4", "#00BCD4", "#009688", "#4CAF50", "#8BC34A", "#CDDC39",
    "#FFEB3B", "#FFC107", "#FF9800", "#FF5722", "#795548", "#607D8B",
]

DEFAULT_ITEMS = [
    {"name": "Profile", "icon": "user-identity"},
    {"name": "Messages", "icon": "mail-message-new"},
    {"name": "Phone", "icon": "call-start"},
    {"name": "Camera", "icon": "camera-photo"},
    {"name": "Gallery", "icon": "image-x-generic"},
]


def tile_color(item):
    """Stable tile colour for an item, independent of hash randomization."""
    return TILE_COLORS[zlib.crc32(item.name.encode('utf-8')) % len(TILE_COLORS)]


def item_to_mime(item):
    mime = QMimeData()
    mime.setData(DOCK_ITEM_MIME_TYPE, json.dumps(item.to_config()).encode('utf-8'))
    return mime


def item_from_mime(mime):
    """Decode the dragged item, or None if the payload is missing or malformed."""
    if mime is None or not mime.hasFormat(DOCK_ITEM_MIME_TYPE):
        return None
    try:
        payload = json.loads(mime.data(DOCK_ITEM_MIME_TYPE).data().decode('utf-8'))
        return DockItem.from_config(payload)
    except (json.JSONDecodeError, ValueError) as e:
        print(f"Ignoring dock item drag payload: {e}")
        return None


class DockItemButton(QToolButton):
    """Dock tile with animated magnification, lift and drop gap.

    Features:
    - Rounded coloured tile with the item icon, or its initial as fallback
    - Animatable extent, lift, gap and icon_scale properties
    - Delayed tooltip shown above the tile
    - Requests a drag once the pointer moves past the drag distance
    """

    hovered = pyqtSignal(object)
    unhovered = pyqtSignal(object)
    drag_requested = pyqtSignal(object)

    def __init__(self, item, settings, parent=None):
        super().__init__(parent)
        self.item = item
        self.settings = settings
        self.dragging = False
        self._extent = float(settings['icon_base_size'])
        self._lift = 0.0
        self._gap = 0.0
        self._icon_scale = self._extent / settings['icon_scale_divider'] if settings['icon_scale_divider'] else 1.0
        self._press_pos = None
        self._animations = {}
        self.setup_button()

    def setup_button(self):
        self.item_icon = self.resolve_icon(self.item.icon)
        self.setText('')
        self.setAccessibleName(self.item.name)
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

        # Room above the resting tile for the hover lift
        headroom = abs(self.settings['max_vertical_translate'])
        self.setFixedHeight(int(round(self.settings['icon_max_size'] + headroom)))
        self._sync_width()

        self.tooltip_timer = QTimer(self)
        self.tooltip_timer.setSingleShot(True)
        self.tooltip_timer.setInterval(int(self.settings['tooltip_wait_ms']))
        self.tooltip_timer.timeout.connect(self.show_tooltip)

    @staticmethod
    def resolve_icon(icon_name):
        """Icon from a file path or a theme name. A null icon means no icon."""
        if not icon_name:
            return QIcon()
        if Path(icon_name).exists():
            return QIcon(icon_name)
        return QIcon.fromTheme(icon_name)

    def _get_extent(self):
        return self._extent

    def _set_extent(self, value):
        self._extent = max(0.0, value)
        self._sync_width()

    extent = pyqtProperty(float, fget=_get_extent, fset=_set_extent)

    def _get_lift(self):
        return self._lift

    def _set_lift(self, value):
        self._lift = value
        self.update()

    lift = pyqtProperty(float, fget=_get_lift, fset=_set_lift)

    def _get_gap(self):
        return self._gap

    def _set_gap(self, value):
        self._gap = max(0.0, value)
        self._sync_width()

    gap = pyqtProperty(float, fget=_get_gap, fset=_set_gap)

    def _get_icon_scale(self):
        return self._icon_scale

    def _set_icon_scale(self, value):
        self._icon_scale = max(0.0, value)
        self.update()

    icon_scale = pyqtProperty(float, fget=_get_icon_scale, fset=_set_icon_scale)

    def _sync_width(self):
        self.setFixedWidth(int(round(self._gap + self._extent)))
        self.update()

    def set_dragging(self, dragging):
        self.dragging = dragging

    def animate_to(self, extent, lift, gap, icon_scale, duration, easing=QEasingCurve.Type.InOutQuad):
        """Animate every property toward its target. A zero duration applies them at once."""
        targets = (('extent', extent), ('lift', lift), ('gap', gap), ('icon_scale', icon_scale))
        for name, value in targets:
            self._animate(name, float(value), duration, easing)

    def _animate(self, name, value, duration, easing):
        animation = self._animations.get(name)
        if animation is None:
            animation = QPropertyAnimation(self, name.encode('ascii'), self)
            self._animations[name] = animation
        animation.stop()

        if duration <= 0:
            setattr(self, name, value)
            return

        animation.setDuration(int(duration))
        animation.setEasingCurve(easing)
        animation.setStartValue(float(getattr(self, name)))
        animation.setEndValue(value)
        animation.start()

    def tile_rect(self):
        """Tile rectangle in widget coordinates for the current extent, lift and gap."""
        headroom = abs(self.settings['max_vertical_translate'])
        tile_height = min(self.settings['icon_min_size'], self._extent)
        top = headroom + self._lift + (self.settings['icon_max_size'] - tile_height) / 2
        return QRectF(self._gap + 2, top, max(self._extent - 4, 0.0), tile_height)

    def paintEvent(self, event):
        if self._extent < 1:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        tile = self.tile_rect()
        radius = self.settings['corner_radius']
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(tile_color(self.item)))
        painter.drawRoundedRect(tile, radius, radius)

        icon_px = int(self.settings['icon_size'] * self._icon_scale)
        if icon_px > 0:
            if not self.item_icon.isNull():
                icon_rect = QRectF(0, 0, icon_px, icon_px)
                icon_rect.moveCenter(tile.center())
                self.item_icon.paint(painter, icon_rect.toRect())
            else:
                font = QFont()
                font.setBold(True)
                font.setPixelSize(max(1, int(icon_px * 0.6)))
                painter.setFont(font)
                painter.setPen(QColor("white"))
                painter.drawText(tile, Qt.AlignmentFlag.AlignCenter, self.item.name[:1].upper())
        painter.end()

    def show_tooltip(self):
        """Show the item name above the tile."""
        if not self.underMouse() or self.dragging:
            return
        offset = int(self.settings['tooltip_vertical_offset'])
        anchor = self.mapToGlobal(QPoint(self.width() // 2, -offset))
        QToolTip.showText(anchor, self.item.name, self, self.rect(), int(self.settings['tooltip_show_ms']))

    def enterEvent(self, event):
        super().enterEvent(event)
        self.tooltip_timer.start()
        self.hovered.emit(self)

    def leaveEvent(self, event):
        super().leaveEvent(event)
        self.tooltip_timer.stop()
        QToolTip.hideText()
        self.unhovered.emit(self)

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self._press_pos = event.position().toPoint()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self._press_pos is not None and event.buttons() & Qt.MouseButton.LeftButton:
            distance = (event.position().toPoint() - self._press_pos).manhattanLength()
            if distance >= QApplication.startDragDistance():
                self._press_pos = None
                self.tooltip_timer.stop()
                QToolTip.hideText()
                self.setDown(False)
                self.drag_requested.emit(self)
                return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        self._press_pos = None
        super().mouseReleaseEvent(event)

    def drag_pixmap(self):
        """Snapshot of the tile, shrunk by the drag feedback scale."""
        pixmap = self.grab(self.tile_rect().toAlignedRect())
        scale = self.settings['drag_feedback_scale']
        width = max(1, int(pixmap.width() * scale))
        height = max(1, int(pixmap.height() * scale))
        return pixmap.scaled(
            width, height,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation
        )


class DockWindow(QWidget):
    """Dock window holding the reorderable items.

    Features:
    - Hovered item grows and lifts, neighbours follow with a decaying falloff
    - Drag-and-drop reordering with a gap opening at the drop target
    - Frameless, translucent and always on top
    - Centred at the bottom of the screen, re-centred when its size changes
    - Settings and items loaded from JSON files
    """

    def __init__(self, items=None, settings_file=SETTINGS_FILE, items_file=ITEMS_FILE):
        super().__init__()
        self.settings_file = Path(settings_file)
        self.items_file = Path(items_file)
        self.load_settings()
        if items is None:
            items = self.load_items()
        self.state = DockOrderState(items)
        self.buttons = []

        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint |
            Qt.WindowType.WindowStaysOnTopHint |
            Qt.WindowType.Tool
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setAcceptDrops(True)

        self.setup_layout()
        self.create_buttons()
        self.state.add_listener(self.on_state_changed)
        self.apply_transforms()

    def get_default_settings(self):
        """Get default settings for first-time initialization.

        Sizes are in pixels, durations in milliseconds:
        - icon_base_size / icon_max_size: tile width at rest and fully hovered
        - max_vertical_translate: lift of the hovered tile (negative is up)
        - drop_margin / margin_offset: gap in front of the drop target, and
          the value the last slot's gap is blended toward
        - transparency: background transparency (0-100)
        """
        return {
            "icon_min_size": 48,
            "icon_base_size": 52,
            "icon_max_size": 55,
            "icon_scale_divider": 68,
            "icon_size": 32,
            "max_vertical_translate": -11,
            "drop_margin": 68,
            "margin_offset": 30,
            "drag_feedback_scale": 0.9,
            "dock_padding": 4,
            "corner_radius": 8,
            "layout_spacing": 0,
            "dock_offset": 10,
            "dock_color": "#000000",
            "transparency": 88,
            "tooltip_wait_ms": 500,
            "tooltip_show_ms": 2000,
            "tooltip_vertical_offset": 35,
            "hover_animation_ms": 150,
            "placeholder_animation_ms": 300,
        }

    def load_settings(self):
        try:
            if self.settings_file.exists():
                with self.settings_file.open('r', encoding='utf-8') as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError("settings must be a JSON object")
            else:
                loaded = self.get_default_settings()
                self.save_settings(loaded)
        except (json.JSONDecodeError, ValueError, OSError) as e:
            print(f"Could not read {self.settings_file}, using defaults: {e}")
            loaded = self.get_default_settings()
            self.save_settings(loaded)

        settings = {}
        for key, default in self.get_default_settings().items():
            value = loaded.get(key, default)
            if isinstance(default, str):
                valid = isinstance(value, str)
            else:
                valid = isinstance(value, (int, float)) and not isinstance(value, bool)
            if not valid:
                print(f"Setting '{key}' has invalid value {value!r}, using {default!r}")
                value = default
            settings[key] = value
        self.settings = settings

    def save_settings(self, settings):
        try:
            with self.settings_file.open('w', encoding='utf-8') as f:
                json.dump(settings, f, indent=4)
        except OSError as e:
            QMessageBox.warning(self, "Error", f"Failed to save settings: {str(e)}")

    def create_default_items_file(self):
        """Create a default items.json file with the sample dock items."""
        try:
            with self.items_file.open('w', encoding='utf-8') as f:
                json.dump({"items": DEFAULT_ITEMS}, f, indent=4)
        except OSError as e:
            QMessageBox.warning(self, "Error", f"Failed to create items file: {str(e)}")

    def load_items(self):
        """Load the dock items from items.json.

        Creates a default items.json if it doesn't exist. Entries that are not
        valid items are skipped.
        """
        if not self.items_file.exists():
            self.create_default_items_file()

        try:
            with self.items_file.open('r', encoding='utf-8-sig') as f:
                config = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            QMessageBox.warning(self, "Error", f"Failed to load items: {str(e)}")
            return []

        entries = config.get('items', []) if isinstance(config, dict) else []
        if not isinstance(entries, list):
            print(f"Ignoring {self.items_file}: 'items' must be a list, got {type(entries).__name__}")
            entries = []
        items = []
        for entry in entries:
            try:
                items.append(DockItem.from_config(entry))
            except ValueError as e:
                print(f"Skipping dock item {entry!r}: {e}")
        return items

    def setup_layout(self):
        self.main_layout = QHBoxLayout(self)
        padding = int(self.settings['dock_padding'])
        self.main_layout.setContentsMargins(padding, padding, padding, padding)
        self.main_layout.setSpacing(int(self.settings['layout_spacing']))
        # The window follows the size of its animated tiles
        self.main_layout.setSizeConstraint(QLayout.SizeConstraint.SetFixedSize)

    def create_buttons(self):
        for item in self.state.items:
            button = DockItemButton(item, self.settings, parent=self)
            button.hovered.connect(self.on_item_hovered)
            button.unhovered.connect(self.on_item_unhovered)
            button.drag_requested.connect(self.start_drag)
            self.main_layout.addWidget(button, alignment=Qt.AlignmentFlag.AlignBottom)
            self.buttons.append(button)

    def sync_buttons(self):
        """Reorder the item buttons to follow the state's item order."""
        if [button.item for button in self.buttons] == self.state.items:
            return

        pool = list(self.buttons)
        ordered = []
        for item in self.state.items:
            for button in pool:
                if button.item == item:
                    pool.remove(button)
                    ordered.append(button)
                    break

        for button in self.buttons:
            self.main_layout.removeWidget(button)
        for button in ordered:
            self.main_layout.addWidget(button, alignment=Qt.AlignmentFlag.AlignBottom)
        self.buttons = ordered

    def item_transforms(self):
        s = self.settings
        return [
            compute_transform(
                self.state.hovered_index, index,
                s['icon_base_size'], s['icon_max_size'],
                s['max_vertical_translate'], s['icon_scale_divider']
            )
            for index in range(len(self.state.items))
        ]

    def item_gap(self, index):
        """Gap in front of the drop target, only while an item is dragged."""
        if self.state.dragged_index is None or self.state.hovered_index != index:
            return 0.0
        return compute_edge_margin(
            index, len(self.state.items),
            self.settings['drop_margin'], self.settings['margin_offset']
        )

    def apply_transforms(self):
        for index, (button, transform) in enumerate(zip(self.buttons, self.item_transforms())):
            if button.dragging:
                # Placeholder left behind by the dragged tile
                button.animate_to(
                    0.0, 0.0, 0.0, 0.0,
                    self.settings['placeholder_animation_ms'],
                    QEasingCurve.Type.OutQuad
                )
            else:
                button.animate_to(
                    transform.size, transform.lift, self.item_gap(index), transform.icon_scale,
                    self.settings['hover_animation_ms']
                )

    def on_state_changed(self, state):
        self.sync_buttons()
        self.apply_transforms()

    def on_item_hovered(self, button):
        if button in self.buttons:
            self.state.enter_item(self.buttons.index(button))

    def on_item_unhovered(self, button):
        self.state.exit_item()

    def start_drag(self, button):
        """Drag the button's item. Blocks until the drop or the cancellation."""
        if button not in self.buttons:
            return

        drag = QDrag(button)
        drag.setMimeData(item_to_mime(button.item))
        pixmap = button.drag_pixmap()
        drag.setPixmap(pixmap)
        drag.setHotSpot(QPoint(pixmap.width() // 2, pixmap.height() // 2))

        button.set_dragging(True)
        self.state.begin_drag(self.buttons.index(button))
        self.apply_transforms()

        drag.exec(Qt.DropAction.MoveAction)

        button.set_dragging(False)
        if self.state.dragged_index is not None:
            # Dropped outside the dock or cancelled
            self.state.end_hover()
        self.apply_transforms()

    def index_at(self, pos):
        """Index of the drop slot under pos, or None over the dock padding."""
        half_spacing = self.main_layout.spacing() / 2
        for index, button in enumerate(self.buttons):
            geometry = button.geometry()
            if geometry.width() <= 0:
                continue
            if geometry.left() - half_spacing <= pos.x() <= geometry.right() + half_spacing:
                return index
        return None

    def hover_drag(self, item, pos):
        target = self.index_at(pos)
        if target is None:
            self.state.end_hover()
            return
        if self.state.dragged_index is None:
            # Re-entering after a leave cleared the dragged index
            dragged_index = self.state.index_of(item)
            if dragged_index is not None:
                self.state.begin_drag(dragged_index)
        self.state.update_hover(target)

    def drop_item(self, item, pos):
        """Commit a drop at pos. Returns False when there is nothing to drop on."""
        target = self.index_at(pos) if item is not None else None
        if target is None:
            self.state.end_hover()
            return False
        self.state.commit_reorder(item, target)
        return True

    def dragEnterEvent(self, event):
        if event.mimeData().hasFormat(DOCK_ITEM_MIME_TYPE):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        item = item_from_mime(event.mimeData())
        if item is None:
            event.ignore()
            return
        self.hover_drag(item, event.position().toPoint())
        event.acceptProposedAction()

    def dragLeaveEvent(self, event):
        self.state.end_hover()
        super().dragLeaveEvent(event)

    def dropEvent(self, event):
        item = item_from_mime(event.mimeData())
        if self.drop_item(item, event.position().toPoint()):
            event.setDropAction(Qt.DropAction.MoveAction)
            event.accept()
        else:
            event.ignore()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Draw background with user-defined color and transparency
        color = QColor(self.settings['dock_color'])
        color.setAlpha(int(255 * (1 - self.settings['transparency'] / 100)))
        painter.setBrush(color)
        painter.setPen(Qt.PenStyle.NoPen)
        radius = self.settings['corner_radius']
        painter.drawRoundedRect(self.rect(), radius, radius)
        painter.end()

    def resizeEvent(self, event):
        """Re-centre the dock whenever the tiles change its size."""
        super().resizeEvent(event)
        self.place_dock()

    def place_dock(self):
        screen = QApplication.primaryScreen()
        if screen is None:
            return
        geometry = screen.availableGeometry()
        x = geometry.x() + (geometry.width() - self.width()) // 2
        y = geometry.y() + geometry.height() - self.height() - int(self.settings['dock_offset'])
        self.move(x, y)


def main():
    app = QApplication(sys.argv)
    dock = DockWindow()
    dock.show()
    # Use single-shot timer to position after the window is shown and sized
    QTimer.singleShot(0, dock.place_dock)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
