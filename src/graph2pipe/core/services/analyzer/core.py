from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from graph2pipe.core.models import StageNode


# Подстроки kind, по которым стадия относится к рантайму.
# Порядок ключей задаёт порядок setup-шагов в workflow.
KIND_MARKERS: Dict[str, Tuple[str, ...]] = {
    "javascript": ("node", "npm"),
    "python": ("python",),
    "java": ("java",),
}


def _stage_languages(stage: StageNode) -> List[str]:
    kind = stage.kind
    return [
        lang
        for lang, markers in KIND_MARKERS.items()
        if any(marker in kind for marker in markers) or stage.data.lang == lang
    ]


def detect_languages(ordered: Sequence[StageNode]) -> List[str]:
    """
    Языки, которые встречаются в упорядоченном пайплайне: по подстроке в kind
    или по явному атрибуту lang. Результат в порядке KIND_MARKERS.
    """
    used: set[str] = set()
    for stage in ordered:
        used.update(_stage_languages(stage))
    return [lang for lang in KIND_MARKERS if lang in used]
