"""Document API: thin routes delegating to DocumentCommandService and DocumentQueryService."""

from datetime import datetime
from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import StreamingResponse

from compliancedocs.api.dependencies import (
    get_document_command_service,
    get_document_query_service,
    require_permission,
)
from compliancedocs.application.dtos.document import DocumentChanges, FileDownload
from compliancedocs.application.dtos.user import AuthenticatedIdentity
from compliancedocs.application.use_cases.documents import (
    DocumentCommandService,
    DocumentQueryService,
    parse_tags,
)
from compliancedocs.core.limiter import limit_upload, limit_writes
from compliancedocs.schemas.document import (
    DocumentListResponse,
    DocumentRecordResponse,
    DocumentResponse,
    DocumentUpdate,
    RevisionResponse,
)

router = APIRouter()

Commands = Annotated[DocumentCommandService, Depends(get_document_command_service)]
Queries = Annotated[DocumentQueryService, Depends(get_document_query_service)]


def content_disposition(filename: str) -> str:
    """attachment header with an ASCII fallback and the RFC 5987 UTF-8 name."""
    fallback = "".join(
        c if 32 <= ord(c) < 127 and c not in '"\\' else "_" for c in filename
    )
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def _stream(queries: DocumentQueryService, download: FileDownload) -> StreamingResponse:
    return StreamingResponse(
        queries.open_stream(download),
        media_type=download.file_type or "application/octet-stream",
        headers={
            "Content-Disposition": content_disposition(download.file_name),
            "Content-Length": str(download.file_size),
        },
    )


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    queries: Queries,
    _: Annotated[AuthenticatedIdentity, Depends(require_permission("document", "read"))],
    category: str | None = None,
    subcategory: str | None = None,
    status: str | None = None,
    search: str | None = None,
    sort: str | None = Query(default=None, description="field:asc|desc"),
    page: int | None = Query(default=None, ge=1),
    limit: int | None = Query(default=None, ge=1),
):
    """Filtered, sorted, paginated list (status defaults to active)."""
    result = await queries.list_documents(
        category_id=category,
        subcategory=subcategory,
        status=status,
        search=search,
        sort=sort,
        page=page,
        limit=limit,
    )
    return DocumentListResponse.from_page(result)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    queries: Queries,
    _: Annotated[AuthenticatedIdentity, Depends(require_permission("document", "read"))],
):
    return DocumentResponse.from_detail(await queries.get_document(document_id))


@router.post("", response_model=DocumentRecordResponse, status_code=201)
@limit_upload
async def create_document(
    request: Request,
    commands: Commands,
    identity: Annotated[
        AuthenticatedIdentity, Depends(require_permission("document", "create"))
    ],
    file: UploadFile | None = File(None),
    title: str | None = Form(None),
    description: str | None = Form(None),
    category: str | None = Form(None),
    subcategory: str | None = Form(None),
    tags: str | None = Form(None),
    review_date: datetime | None = Form(None),
):
    """Upload a file with its metadata (multipart, file field "file")."""
    created = await commands.create_document(
        identity.user_id,
        file_data=file.file if file else None,
        filename=file.filename if file else None,
        content_type=file.content_type if file else None,
        title=title,
        category_id=category,
        subcategory=subcategory,
        description=description,
        tags=parse_tags(tags),
        review_date=review_date,
    )
    return DocumentRecordResponse.from_result(created)


@router.put("/{document_id}", response_model=DocumentRecordResponse)
@limit_writes
async def update_document(
    request: Request,
    document_id: str,
    body: DocumentUpdate,
    commands: Commands,
    identity: Annotated[
        AuthenticatedIdentity, Depends(require_permission("document", "update"))
    ],
):
    """Partial update; omitted fields stay unchanged."""
    changes = DocumentChanges(
        title=body.title.strip() if body.title is not None else None,
        description=body.description,
        category_id=body.category,
        subcategory=body.subcategory,
        tags=parse_tags(body.tags) if body.tags is not None else None,
        review_date=body.review_date,
        status=body.status,
    )
    updated = await commands.update_document(identity.user_id, document_id, changes)
    return DocumentRecordResponse.from_result(updated)


@router.delete("/{document_id}", response_model=DocumentRecordResponse)
@limit_writes
async def delete_document(
    request: Request,
    document_id: str,
    commands: Commands,
    identity: Annotated[
        AuthenticatedIdentity, Depends(require_permission("document", "delete"))
    ],
):
    """Soft delete: status becomes deleted; file and revisions are kept."""
    return DocumentRecordResponse.from_result(
        await commands.soft_delete(identity.user_id, document_id)
    )


@router.get("/{document_id}/download")
async def download_document(
    document_id: str,
    queries: Queries,
    _: Annotated[AuthenticatedIdentity, Depends(require_permission("document", "read"))],
) -> StreamingResponse:
    return _stream(queries, await queries.get_download(document_id))


@router.post(
    "/{document_id}/revisions", response_model=DocumentRecordResponse, status_code=201
)
@limit_upload
async def upload_revision(
    request: Request,
    document_id: str,
    commands: Commands,
    identity: Annotated[
        AuthenticatedIdentity, Depends(require_permission("revision", "create"))
    ],
    file: UploadFile | None = File(None),
    changes: str | None = Form(None),
):
    """Replace the document's file; the previous file is kept as a revision."""
    updated = await commands.upload_revision(
        identity.user_id,
        document_id,
        file_data=file.file if file else None,
        filename=file.filename if file else None,
        content_type=file.content_type if file else None,
        changes=changes,
    )
    return DocumentRecordResponse.from_result(updated)


@router.get("/{document_id}/revisions", response_model=list[RevisionResponse])
async def list_revisions(
    document_id: str,
    queries: Queries,
    _: Annotated[AuthenticatedIdentity, Depends(require_permission("revision", "read"))],
):
    """Revisions newest first."""
    return [RevisionResponse.from_result(r) for r in await queries.list_revisions(document_id)]


@router.get("/{document_id}/revisions/{version}/download")
async def download_revision(
    document_id: str,
    version: int,
    queries: Queries,
    _: Annotated[AuthenticatedIdentity, Depends(require_permission("revision", "read"))],
) -> StreamingResponse:
    return _stream(queries, await queries.get_revision_download(document_id, version))
