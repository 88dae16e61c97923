"""
Version Routes

Export the content set as a SQL dump, list recorded versions and download
a version again.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import RedirectResponse

from content_admin.auth import get_current_user, require_role
from content_admin.constants import EXPORT_ROLES
from content_admin.database import get_row_store
from content_admin.row_store import RowStore
from content_admin.schemas.user import TokenUser
from content_admin.schemas.version import ExportArtifact, ExportRequest, VersionListResponse
from content_admin.services.export_service import export_service

router = APIRouter(tags=["Versions"])


def attachment_response(artifact: ExportArtifact, regenerated: bool = False) -> Response:
    headers = {
        "Content-Disposition": artifact.content_disposition,
        "X-Version-Id": str(artifact.version.id),
    }
    if regenerated:
        headers["X-Export-Regenerated"] = "true"
    return Response(content=artifact.body, media_type=artifact.media_type, headers=headers)


@router.get("/versions-list", response_model=VersionListResponse)
async def list_versions(
    store: RowStore = Depends(get_row_store),
    current_user: TokenUser = Depends(get_current_user),
):
    versions = await export_service.list_versions(store)
    return VersionListResponse(versions=versions, count=len(versions))


@router.post("/export-db")
async def export_db(
    payload: ExportRequest,
    store: RowStore = Depends(get_row_store),
    current_user: TokenUser = Depends(require_role(*EXPORT_ROLES)),
):
    """
    Export non-deleted content and its translations as SQL.

    **Parameters**:
    - version_number: Unique label for this export
    - notes: Optional free text

    **Returns**: SQL file
    """
    artifact = await export_service.export(store, payload.version_number, payload.notes)
    return attachment_response(artifact)


@router.get("/versions-download")
async def download_version(
    id: Optional[int] = Query(None, description="Version record id."),
    store: RowStore = Depends(get_row_store),
    current_user: TokenUser = Depends(get_current_user),
):
    """
    Download a recorded version.

    Redirects to the stored file when the version has one. Otherwise the
    dump is rebuilt from the current content.
    """
    result = await export_service.redownload(store, id)
    if isinstance(result, str):
        return RedirectResponse(url=result, status_code=status.HTTP_302_FOUND)
    return attachment_response(result, regenerated=True)
