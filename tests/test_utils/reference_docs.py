"""Small reference documents for tests."""

from pathlib import Path

SAMPLE_DOC = """---
title: Sample controls
sources:
  - "hand written"
---

# Sample

- CLSID `{11111111-2222-3333-4444-555555555555}` Sample Widget Control
- IID `{AAAAAAAA-BBBB-CCCC-DDDD-EEEEEEEEEEEE}` ISampleWidget
- this bullet is prose
- LIBID {99999999-8888-7777-6666-555555555555} Sample Type Library

```reg
[HKEY_CLASSES_ROOT\\Sample.Widget]
@="Sample Widget"

[HKEY_CLASSES_ROOT\\Sample.Widget\\CurVer]
@="Sample.Widget.1"

[HKEY_CLASSES_ROOT\\Sample.Widget.1\\CLSID]
@="{11111111-2222-3333-4444-555555555555}"

[HKEY_CLASSES_ROOT\\Sample.Broken\\CLSID]
@="{00000000-0000-0000-0000-000000000000}"
```

```python
- CLSID not-a-guid ignored inside other fences
```
"""


def write_doc(directory: Path, name: str, text: str) -> Path:
    """Write a reference document and return its path."""
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path
