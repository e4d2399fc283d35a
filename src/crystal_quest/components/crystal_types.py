from dataclasses import dataclass
from typing import Dict

@dataclass(slots=True)
class CrystalTypes:
    """Canonical crystal kind definitions stored on a single entity.

    glyphs maps kind -> display glyph. The kinds that actually spawn are part of Rules.
    """
    glyphs: Dict[str, str]

    def glyph_for(self, kind: str | None) -> str:
        if kind is None:
            return '·'
        return self.glyphs.get(kind, '?')
