"""Host adapters embedding the editing session in a UI toolkit."""
