"""Catalogue of monitored listing pages and the prompts sent for each."""

from typing import Dict, Iterable, List, Optional

from .models import REFERENCED_SHAPE, RecordShape, SourceDefinition

_FIELD_HINTS: Dict[str, str] = {
    "title": "The full title exactly as it appears in the list.",
    "deadline": "Any date attached to the item (deadline, publication or validity). Empty string if none.",
    "reference": "The call, tender or process number shown for the item. Empty string if none.",
    "description": "One short sentence describing the item.",
}


def output_instruction(shape: RecordShape) -> str:
    """Output-shape instruction appended to every source prompt."""
    lines = []
    for key in shape.keys:
        hint = _FIELD_HINTS.get(key, "")
        lines.append(f'        "{key}": "{hint}"')
    body = ",\n".join(lines)
    return (
        "Return ONLY a plain JSON array.\n"
        "Required structure:\n"
        "[\n"
        "    {\n"
        f"{body}\n"
        "    }\n"
        "]\n"
        "If nothing is listed, return an empty array: []\n"
    )


def build_prompt(source: SourceDefinition) -> str:
    """Full agent instruction for one source."""
    return (
        f"Open: {source.url}\n"
        f"{source.instructions.strip()}\n"
        "Keep titles in their original language.\n\n"
        f"{output_instruction(source.shape)}"
    )


IPEA = SourceDefinition(
    name="IPEA",
    url="https://www.ipea.gov.br/portal/bolsas-de-pesquisa",
    color="#2980b9",
    shape=REFERENCED_SHAPE,
    instructions="""
        List EVERY public call (Chamada Pública) visible in the list.
        Take only the blue title of each call (e.g. "Chamada Pública n° 56/2025",
        "Chamada Pública 057/2025"), written exactly as it is in the list.
        Put the call number on its own in 'reference'.
        Do not filter by status. Capture the complete title.
    """,
)

FNP = SourceDefinition(
    name="FNP",
    url="https://fnp.org.br/transparencia/documentos?cat=37",
    color="#e67e22",
    instructions="""
        List EVERY item (Editais, TRs, Cotações and so on).
        Each item has a Download button; ignore it.
        Do not filter anything. Capture the complete title.
    """,
)

UNDP = SourceDefinition(
    name="UNDP",
    url="https://parceiros.undp.org.br/opportunities",
    color="#27ae60",
    instructions="""
        List EVERY opportunity, vacancy or call on the page.
        Do not filter by status. Capture the complete title.
    """,
)

ICLEI = SourceDefinition(
    name="ICLEI",
    url="https://americadosul.iclei.org/trabalhe-conosco/?cat=15",
    color="#8e44ad",
    instructions="""
        This is ICLEI's "Trabalhe Conosco" page.
        List EVERY vacancy, Terms of Reference (TdR) or procurement listed.
        Do not filter by date or status; we want everything in the list.
        Put the complete title in 'title' and the publication date or
        deadline in 'deadline'.
    """,
)

DEFAULT_SOURCES: List[SourceDefinition] = [IPEA, FNP, UNDP, ICLEI]


def select_sources(
    names: Optional[Iterable[str]] = None,
    sources: Optional[List[SourceDefinition]] = None,
) -> List[SourceDefinition]:
    """
    Restrict the catalogue to the given source names.

    Matching is case-insensitive and the configured order is kept.

    Raises:
        ValueError: If a name matches no source.
    """
    catalogue = DEFAULT_SOURCES if sources is None else sources
    wanted = [name.strip().lower() for name in (names or []) if name.strip()]
    if not wanted:
        return list(catalogue)

    known = {source.name.lower() for source in catalogue}
    unknown = [name for name in wanted if name not in known]
    if unknown:
        raise ValueError(
            f"Unknown source(s): {', '.join(unknown)}. "
            f"Available: {', '.join(s.name for s in catalogue)}"
        )
    return [source for source in catalogue if source.name.lower() in wanted]
