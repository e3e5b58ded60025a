"""Block editor for KegelBump.

A modal dialog listing every block of the routine as three adjustable
lines (reps, hold seconds, rest seconds).  Blocks can be added and
deleted.  Pressing Back accepts the dialog; the caller then reads
``configuration()`` and hands it to the engine.  Escape discards edits.
"""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QFrame, QScrollArea, QWidget,
)

from ..session.configuration import (
    MAX_REPEAT_COUNT, Block, Configuration, PhaseType, hold_rest_block,
)


# ── editable model ───────────────────────────────────────────────────────────


@dataclass
class EditableBlock:
    """A block as the editor shows it: one hold and one rest phase."""

    repeat_count: int
    hold_duration: int
    rest_duration: int

    def __post_init__(self) -> None:
        self.repeat_count = min(MAX_REPEAT_COUNT, max(1, self.repeat_count))
        self.hold_duration = max(1, self.hold_duration)
        self.rest_duration = max(1, self.rest_duration)

    @classmethod
    def from_block(cls, block: Block) -> EditableBlock:
        hold = next((p.duration for p in block.phases if p.type == PhaseType.HOLD), 1)
        rest = next((p.duration for p in block.phases if p.type == PhaseType.REST), 1)
        return cls(block.repeat_count, hold, rest)

    @classmethod
    def default(cls) -> EditableBlock:
        return cls(repeat_count=10, hold_duration=5, rest_duration=5)

    def adjust(self, field_name: str, delta: int) -> None:
        """Step one of the three values, never below 1."""
        value = max(1, getattr(self, field_name) + delta)
        if field_name == "repeat_count":
            value = min(MAX_REPEAT_COUNT, value)
        setattr(self, field_name, value)

    def to_block(self) -> Block:
        return hold_rest_block(
            max(1, self.repeat_count),
            max(1, self.hold_duration),
            max(1, self.rest_duration),
        )


# ── row widgets ──────────────────────────────────────────────────────────────


class AdjustmentLine(QWidget):
    """``[+]  label  [-]``"""

    def __init__(
        self, label_object_name: str, parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        row = QHBoxLayout(self)
        row.setContentsMargins(0, 0, 0, 0)
        row.setSpacing(8)

        self.plus_btn = QPushButton("+", self)
        self.plus_btn.setObjectName("stepButton")
        self.label = QLabel("", self)
        self.label.setObjectName(label_object_name)
        self.minus_btn = QPushButton("−", self)
        self.minus_btn.setObjectName("stepButton")

        row.addWidget(self.plus_btn)
        row.addWidget(self.label)
        row.addStretch()
        row.addWidget(self.minus_btn)


class BlockRow(QWidget):
    """Three adjustment lines plus a delete button for one block."""

    delete_requested = pyqtSignal(object)

    def __init__(self, block: EditableBlock, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._block = block

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 4, 0, 4)
        layout.setSpacing(4)

        self.reps_line = AdjustmentLine("repsLabel", self)
        self.hold_line = AdjustmentLine("durationLabel", self)
        self.rest_line = AdjustmentLine("durationLabel", self)
        for line, field_name in (
            (self.reps_line, "repeat_count"),
            (self.hold_line, "hold_duration"),
            (self.rest_line, "rest_duration"),
        ):
            line.plus_btn.clicked.connect(
                lambda _=False, f=field_name: self._step(f, +1)
            )
            line.minus_btn.clicked.connect(
                lambda _=False, f=field_name: self._step(f, -1)
            )
            layout.addWidget(line)

        self.delete_btn = QPushButton("DELETE", self)
        self.delete_btn.setObjectName("deleteButton")
        self.delete_btn.clicked.connect(lambda: self.delete_requested.emit(self))
        layout.addWidget(self.delete_btn, alignment=Qt.AlignmentFlag.AlignRight)

        self._refresh()

    @property
    def block(self) -> EditableBlock:
        return self._block

    def _step(self, field_name: str, delta: int) -> None:
        self._block.adjust(field_name, delta)
        self._refresh()

    def _refresh(self) -> None:
        b = self._block
        self.reps_line.label.setText(f"{b.repeat_count} Reps")
        self.hold_line.label.setText(f"{b.hold_duration}s hold")
        self.rest_line.label.setText(f"{b.rest_duration}s rest")


# ── dialog ───────────────────────────────────────────────────────────────────


class SessionEditorDialog(QDialog):
    """Modal editor for the block list."""

    def __init__(
        self,
        configuration: Configuration,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Customize")
        self.setMinimumSize(300, 420)
        self.setModal(True)

        self._rows: list[BlockRow] = []
        self._build_ui()
        for block in configuration.blocks:
            self._append_row(EditableBlock.from_block(block))

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(12)

        # ── header ───────────────────────────────────────────────────
        header = QHBoxLayout()
        self._back_btn = QPushButton("‹", self)
        self._back_btn.setObjectName("backButton")
        self._back_btn.clicked.connect(self.accept)
        title = QLabel("Customize", self)
        title.setStyleSheet("font-size: 16px; font-weight: 700;")
        header.addWidget(self._back_btn)
        header.addStretch()
        header.addWidget(title)
        header.addStretch()
        header.addSpacing(self._back_btn.sizeHint().width())
        root.addLayout(header)

        # ── block list ───────────────────────────────────────────────
        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.Shape.NoFrame)
        container = QWidget(scroll)
        self._list_layout = QVBoxLayout(container)
        self._list_layout.setContentsMargins(0, 0, 0, 0)
        self._list_layout.setSpacing(6)

        self._add_btn = QPushButton("+  Add Block", container)
        self._add_btn.setObjectName("addBlockButton")
        self._add_btn.clicked.connect(self.add_block)
        self._list_layout.addWidget(self._add_btn)
        self._list_layout.addStretch()

        scroll.setWidget(container)
        root.addWidget(scroll)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def rows(self) -> tuple[BlockRow, ...]:
        return tuple(self._rows)

    def add_block(self) -> None:
        self._append_row(EditableBlock.default())

    def delete_block(self, index: int) -> None:
        if not 0 <= index < len(self._rows):
            return
        row = self._rows.pop(index)
        self._list_layout.removeWidget(row)
        row.setParent(None)
        row.deleteLater()
        self._refresh_separators()

    def configuration(self) -> Configuration:
        """The edited routine as a fresh ``Configuration``."""
        return Configuration(tuple(row.block.to_block() for row in self._rows))

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _append_row(self, block: EditableBlock) -> None:
        row = BlockRow(block)
        row.delete_requested.connect(self._on_delete_requested)
        # Rows sit above the add button
        self._list_layout.insertWidget(len(self._rows), row)
        self._rows.append(row)
        self._refresh_separators()

    def _on_delete_requested(self, row: BlockRow) -> None:
        if row in self._rows:
            self.delete_block(self._rows.index(row))

    def _refresh_separators(self) -> None:
        """Accent underline on every row but the last."""
        for i, row in enumerate(self._rows):
            if i < len(self._rows) - 1:
                row.setStyleSheet("BlockRow { border-bottom: 1px solid #FF9500; }")
            else:
                row.setStyleSheet("")
