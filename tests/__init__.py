"""recordgate test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- contract/     : Shared behavior/invariants enforced across every Store backend.
- integration/  : Real interactions with a file-backed database.
- e2e/          : The `recordgate` command driven through Click's CliRunner.
- fixtures/     : Shared pytest plugins (record types, SQLite engines).

General guidance
- Keep unit fast and deterministic; prefer the InMemoryStore over mocks.
- Contract parametrizes implementations to ensure consistent behavior.
- Property-based tests (hypothesis) live with the layer they exercise.
- Markers: unit, contract, integration, e2e (applied by each folder's conftest).
"""
