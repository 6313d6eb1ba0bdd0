"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from .constants import EditorConstants
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command
        """


class MoveCommand(EditorCommand):
    """Unchecked one-step cursor movement; the editor clamps afterwards."""

    def __init__(self, direction: str):
        self.direction = direction

    def execute(self, editor, key_event):
        editor.session.move(self.direction)


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor, key_event):
        self._edit(editor, key_event)

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.session.backspace()


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.session.delete()


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.session.newline()


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        # Printable ASCII only; everything else is ignored
        if len(char) == 1 and EditorConstants.PRINTABLE_MIN <= ord(char) <= EditorConstants.PRINTABLE_MAX:
            editor.session.insert_char(char)


class SaveCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.session.save()


class QuitCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.running = False


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        for direction in ('up', 'down', 'left', 'right'):
            self.register((KeyType.SPECIAL, direction), MoveCommand(direction))

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())

        # System commands
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'w'), SaveCommand())
        self.register((KeyType.SPECIAL, 'escape'), QuitCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Execute the command for the given key event.

        Unmapped regular keys are offered to ``InsertTextCommand``; anything
        else unmapped is ignored.
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            command.execute(editor, key_event)
        elif key_event.key_type == KeyType.REGULAR:
            InsertTextCommand().execute(editor, key_event)
