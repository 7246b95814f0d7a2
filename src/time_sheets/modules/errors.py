class MissingOverviewSheetError(RuntimeError):
    """Das Übersichtsblatt fehlt in der Arbeitszeit-Mappe."""

    def __init__(self, sheet_name: str) -> None:
        super().__init__(f'Please make sure you have a main-sheet named "{sheet_name}"')
        self.sheet_name = sheet_name


class DuplicateSheetError(ValueError):
    """Ein Blatt mit diesem Namen existiert bereits."""

    def __init__(self, sheet_name: str) -> None:
        super().__init__(f"Blatt '{sheet_name}' existiert bereits in der Arbeitszeit-Mappe.")
        self.sheet_name = sheet_name
