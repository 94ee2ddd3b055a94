"""Release entries for the project site.

The site lists, per project, the versions users can pick, with their status
and documentation links. ``sagan_release`` derives such an entry from a
``Version``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from releaser.versions import Category, Stage, Version

__all__ = [
    "SaganRelease",
    "sagan_release",
    "GENERAL_AVAILABILITY",
    "PRERELEASE",
    "SNAPSHOT",
]

GENERAL_AVAILABILITY = "GENERAL_AVAILABILITY"
PRERELEASE = "PRERELEASE"
SNAPSHOT = "SNAPSHOT"

DEFAULT_REF_DOC_URL = "https://docs.spring.io/{project}/docs/{{version}}/reference/html/"
DEFAULT_API_DOC_URL = "https://docs.spring.io/{project}/docs/{{version}}/api/"


@dataclass(frozen=True, slots=True)
class SaganRelease:
    release_status: str | None = None
    ref_doc_url: str | None = None
    api_doc_url: str | None = None
    group_id: str | None = None
    artifact_id: str | None = None
    version: str | None = None
    current: bool = False
    general_availability: bool = False
    pre_release: bool = False
    version_display_name: str | None = None
    snapshot: bool = False

    def as_dict(self) -> dict[str, object]:
        """camelCase payload; unset (None) fields are left out, empty strings are kept."""
        out: dict[str, object] = {}
        for key, value in asdict(self).items():
            if value is None:
                continue
            head, *rest = key.split("_")
            out[head + "".join(part.capitalize() for part in rest)] = value
        return out


def _status(stage: Stage) -> str:
    if stage is Stage.SNAPSHOT:
        return SNAPSHOT
    if stage.category is Category.GA:
        return GENERAL_AVAILABILITY
    return PRERELEASE


def sagan_release(
    version: Version,
    *,
    group_id: str | None = None,
    current: bool = False,
    ref_doc_url: str | None = None,
    api_doc_url: str | None = None,
) -> SaganRelease:
    """Site entry for ``version``.

    Doc URLs may contain ``{version}``, replaced by the version string; the
    defaults point at the project's reference and API docs.
    """
    status = _status(version.stage)
    ref = ref_doc_url or DEFAULT_REF_DOC_URL.format(project=version.project_name)
    api = api_doc_url or DEFAULT_API_DOC_URL.format(project=version.project_name)
    return SaganRelease(
        release_status=status,
        ref_doc_url=ref.format(version=version.version),
        api_doc_url=api.format(version=version.version),
        group_id=group_id,
        artifact_id=version.project_name,
        version=version.version,
        current=current,
        general_availability=status == GENERAL_AVAILABILITY,
        pre_release=status == PRERELEASE,
        version_display_name=version.version,
        snapshot=status == SNAPSHOT,
    )
