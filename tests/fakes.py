"""In-memory repositories and helpers for unit and API tests (no database)."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta

from compliancedocs.application.dtos.category import CategoryResult, SubcategoryData
from compliancedocs.application.dtos.document import (
    CategoryRef,
    DocumentChanges,
    DocumentCreate,
    DocumentDetail,
    DocumentFilters,
    DocumentPage,
    DocumentResult,
    PersonRef,
    RevisionCreate,
    RevisionResult,
    SortSpec,
    StoredFile,
)
from compliancedocs.application.dtos.user import UserCreate, UserCredentials, UserResult
from compliancedocs.domain.exceptions import (
    ConflictException,
    DocumentVersionConflictException,
    DuplicateUserException,
)
from compliancedocs.shared.utils.datetime import utc_now

_counter = 0


def next_id(prefix: str) -> str:
    global _counter
    _counter += 1
    return f"{prefix}{_counter:06d}"


class FakePasswordHasher:
    """Reversible "hash" so tests stay fast; never used outside tests."""

    def __init__(self) -> None:
        self.dummy_calls = 0

    async def hash(self, password: str) -> str:
        return f"hashed::{password}"

    async def verify(self, password: str, hashed_password: str) -> bool:
        return hashed_password == f"hashed::{password}"

    async def verify_dummy(self, password: str) -> None:
        self.dummy_calls += 1


class InMemoryUserRepository:
    def __init__(self) -> None:
        self.users: dict[str, UserResult] = {}
        self.hashes: dict[str, str] = {}

    async def get_by_id(self, user_id: str) -> UserResult | None:
        return self.users.get(user_id)

    async def get_by_email(self, email: str) -> UserResult | None:
        email = email.strip().lower()
        return next((u for u in self.users.values() if u.email == email), None)

    async def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        user = await self.get_by_email(email)
        return UserCredentials(user, self.hashes[user.id]) if user else None

    async def get_credentials_by_id(self, user_id: str) -> UserCredentials | None:
        user = self.users.get(user_id)
        return UserCredentials(user, self.hashes[user.id]) if user else None

    async def create_user(self, data: UserCreate) -> UserResult:
        if await self.get_by_email(data.email):
            raise DuplicateUserException()
        user = UserResult(
            id=next_id("usr"),
            email=data.email.lower(),
            name=data.name,
            role=data.role,
            department=data.department,
            is_active=True,
            created_at=utc_now(),
        )
        self.users[user.id] = user
        self.hashes[user.id] = data.hashed_password
        return user

    async def record_login(self, user_id: str, at: datetime) -> None:
        self.users[user_id] = dataclasses.replace(self.users[user_id], last_login=at)

    async def update_password(self, user_id: str, hashed_password: str) -> bool:
        if user_id not in self.users:
            return False
        self.hashes[user_id] = hashed_password
        return True

    async def set_active(self, user_id: str, is_active: bool) -> bool:
        if user_id not in self.users:
            return False
        self.users[user_id] = dataclasses.replace(self.users[user_id], is_active=is_active)
        return True


class InMemoryCategoryRepository:
    def __init__(self) -> None:
        self.categories: dict[str, CategoryResult] = {}

    async def list_all(self) -> list[CategoryResult]:
        return sorted(self.categories.values(), key=lambda c: c.name)

    async def get_by_id(self, category_id: str) -> CategoryResult | None:
        return self.categories.get(category_id)

    async def get_by_name(self, name: str) -> CategoryResult | None:
        return next((c for c in self.categories.values() if c.name == name), None)

    async def create_category(
        self, name: str, description: str, subcategories: list[SubcategoryData]
    ) -> CategoryResult:
        if await self.get_by_name(name):
            raise ConflictException("Category with this name already exists")
        now = utc_now()
        category = CategoryResult(
            id=next_id("cat"),
            name=name,
            description=description,
            subcategories=list(subcategories),
            created_at=now,
            updated_at=now,
        )
        self.categories[category.id] = category
        return category

    def _replace(self, category_id: str, **changes) -> CategoryResult:
        updated = dataclasses.replace(
            self.categories[category_id], updated_at=utc_now(), **changes
        )
        self.categories[category_id] = updated
        return updated

    async def update_category(
        self, category_id: str, name: str | None, description: str | None
    ) -> CategoryResult | None:
        current = self.categories.get(category_id)
        if current is None:
            return None
        return self._replace(
            category_id,
            name=current.name if name is None else name,
            description=current.description if description is None else description,
        )

    async def delete_category(self, category_id: str) -> bool:
        return self.categories.pop(category_id, None) is not None

    async def add_subcategory(self, category_id: str, sub: SubcategoryData) -> CategoryResult:
        subs = list(self.categories[category_id].subcategories) + [sub]
        return self._replace(category_id, subcategories=subs)

    async def update_subcategory(
        self,
        category_id: str,
        name: str,
        new_name: str | None,
        description: str | None,
    ) -> CategoryResult:
        subs = [
            SubcategoryData(
                name=new_name or s.name,
                description=s.description if description is None else description,
            )
            if s.name == name
            else s
            for s in self.categories[category_id].subcategories
        ]
        return self._replace(category_id, subcategories=subs)

    async def remove_subcategory(self, category_id: str, name: str) -> CategoryResult:
        subs = [s for s in self.categories[category_id].subcategories if s.name != name]
        return self._replace(category_id, subcategories=subs)

    async def count(self) -> int:
        return len(self.categories)


class InMemoryDocumentRepository:
    """Mirrors the SQL repository: expanded reads, conditional version bump."""

    def __init__(
        self,
        users: InMemoryUserRepository,
        categories: InMemoryCategoryRepository,
    ) -> None:
        self.users = users
        self.categories = categories
        self.documents: dict[str, DocumentResult] = {}
        # Simulates a concurrent upload winning the race.
        self.fail_next_version_bump = False

    def _person(self, user_id: str) -> PersonRef | None:
        user = self.users.users.get(user_id)
        return PersonRef(id=user.id, name=user.name) if user else None

    def _detail(self, doc: DocumentResult, with_subcategories: bool) -> DocumentDetail:
        category = self.categories.categories.get(doc.category_id)
        return DocumentDetail(
            document=doc,
            category=CategoryRef(
                id=doc.category_id,
                name=category.name if category else "",
                subcategories=list(category.subcategories)
                if category and with_subcategories
                else None,
            ),
            uploaded_by=self._person(doc.uploaded_by),
            last_modified_by=self._person(doc.last_modified_by),
        )

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        return self.documents.get(document_id)

    async def get_detail(self, document_id: str) -> DocumentDetail | None:
        doc = self.documents.get(document_id)
        return self._detail(doc, True) if doc else None

    async def list_documents(
        self, filters: DocumentFilters, sort: SortSpec, page: int, limit: int
    ) -> DocumentPage:
        docs = list(self.documents.values())
        if filters.category_id:
            docs = [d for d in docs if d.category_id == filters.category_id]
        if filters.subcategory:
            docs = [d for d in docs if d.subcategory == filters.subcategory]
        if filters.status:
            docs = [d for d in docs if d.status == filters.status]
        if filters.search:
            words = filters.search.lower().split()
            docs = [
                d
                for d in docs
                if all(
                    w in f"{d.title} {d.description} {d.subcategory} {' '.join(d.tags)}".lower()
                    for w in words
                )
            ]
        docs.sort(key=lambda d: (getattr(d, sort.column), d.id), reverse=sort.descending)
        start = (page - 1) * limit
        return DocumentPage(
            documents=[self._detail(d, False) for d in docs[start : start + limit]],
            total=len(docs),
            page=page,
            limit=limit,
        )

    async def create_document(self, data: DocumentCreate) -> DocumentResult:
        now = utc_now()
        doc = DocumentResult(
            id=next_id("doc"),
            title=data.title,
            description=data.description,
            category_id=data.category_id,
            subcategory=data.subcategory,
            tags=list(data.tags),
            file_path=data.file.storage_ref,
            file_name=data.file.original_name,
            file_size=data.file.size,
            file_type=data.file.content_type,
            uploaded_by=data.uploaded_by,
            last_modified_by=data.uploaded_by,
            review_date=data.review_date,
            status="active",
            version=1,
            created_at=now,
            updated_at=now,
        )
        self.documents[doc.id] = doc
        return doc

    def _replace(self, document_id: str, **changes) -> DocumentResult:
        current = self.documents[document_id]
        updated = dataclasses.replace(
            current,
            updated_at=current.updated_at + timedelta(microseconds=1),
            **changes,
        )
        self.documents[document_id] = updated
        return updated

    async def update_document(
        self, document_id: str, changes: DocumentChanges, actor_id: str
    ) -> DocumentResult | None:
        if document_id not in self.documents:
            return None
        values = {
            k: v
            for k, v in dataclasses.asdict(changes).items()
            if v is not None
        }
        return self._replace(document_id, last_modified_by=actor_id, **values)

    async def soft_delete(self, document_id: str, actor_id: str) -> DocumentResult | None:
        if document_id not in self.documents:
            return None
        return self._replace(document_id, status="deleted", last_modified_by=actor_id)

    async def replace_file_if_version(
        self,
        document_id: str,
        expected_version: int,
        file: StoredFile,
        actor_id: str,
    ) -> DocumentResult | None:
        current = self.documents.get(document_id)
        if self.fail_next_version_bump:
            self.fail_next_version_bump = False
            return None
        if current is None or current.version != expected_version:
            return None
        return self._replace(
            document_id,
            file_path=file.storage_ref,
            file_name=file.original_name,
            file_size=file.size,
            file_type=file.content_type,
            version=expected_version + 1,
            last_modified_by=actor_id,
        )

    async def count_by_category(self, category_id: str) -> int:
        return sum(1 for d in self.documents.values() if d.category_id == category_id)

    async def count_by_subcategory(self, category_id: str, subcategory: str) -> int:
        return sum(
            1
            for d in self.documents.values()
            if d.category_id == category_id and d.subcategory == subcategory
        )

    async def rename_subcategory(self, category_id: str, old_name: str, new_name: str) -> int:
        moved = 0
        for doc in list(self.documents.values()):
            if doc.category_id == category_id and doc.subcategory == old_name:
                self._replace(doc.id, subcategory=new_name)
                moved += 1
        return moved


class InMemoryRevisionRepository:
    def __init__(self, users: InMemoryUserRepository) -> None:
        self.users = users
        self.revisions: list[RevisionResult] = []

    async def create_revision(self, data: RevisionCreate) -> RevisionResult:
        if await self.get_by_version(data.document_id, data.version):
            raise DocumentVersionConflictException(data.document_id, data.version)
        user = self.users.users.get(data.created_by)
        revision = RevisionResult(
            id=next_id("rev"),
            document_id=data.document_id,
            version=data.version,
            file_path=data.file_path,
            file_name=data.file_name,
            file_size=data.file_size,
            file_type=data.file_type,
            changes=data.changes,
            created_by=PersonRef(id=user.id, name=user.name) if user else None,
            created_at=utc_now(),
        )
        self.revisions.append(revision)
        return revision

    async def list_for_document(self, document_id: str) -> list[RevisionResult]:
        return sorted(
            (r for r in self.revisions if r.document_id == document_id),
            key=lambda r: r.version,
            reverse=True,
        )

    async def get_by_version(self, document_id: str, version: int) -> RevisionResult | None:
        return next(
            (
                r
                for r in self.revisions
                if r.document_id == document_id and r.version == version
            ),
            None,
        )

    async def count_for_document(self, document_id: str) -> int:
        return sum(1 for r in self.revisions if r.document_id == document_id)


class Store:
    """One shared in-memory "database" for a test."""

    def __init__(self) -> None:
        self.users = InMemoryUserRepository()
        self.categories = InMemoryCategoryRepository()
        self.documents = InMemoryDocumentRepository(self.users, self.categories)
        self.revisions = InMemoryRevisionRepository(self.users)


async def make_document(
    store: Store,
    category_id: str,
    subcategory: str,
    *,
    status: str = "active",
    title: str = "Doc",
    tags: list[str] | None = None,
    uploaded_by: str = "usr-seed",
) -> DocumentResult:
    """Insert a document row directly (no blob) for catalog and listing tests."""
    doc = await store.documents.create_document(
        DocumentCreate(
            title=title,
            description="",
            category_id=category_id,
            subcategory=subcategory,
            tags=list(tags or []),
            file=StoredFile(
                storage_ref=f"file-{next_id('blob')}.pdf",
                original_name="doc.pdf",
                size=3,
                content_type="application/pdf",
            ),
            uploaded_by=uploaded_by,
            review_date=utc_now() + timedelta(days=365),
        )
    )
    if status != "active":
        doc = store.documents._replace(doc.id, status=status)
    return doc
