from uuid import UUID

from fair_async_rlock import FairAsyncRLock
from pydantic import ValidationError

from meditimer.core.base import MeditimerBase
from meditimer.exceptions import DuplicateTemplateError, TemplateNotFoundError
from meditimer.logging_ import LOG_LEVELS
from meditimer.models import TemplateList, TimerTemplate

from .kv import KeyValueStore

DEFAULT_TEMPLATES_KEY = "TimerTemplates"


class TemplateStore(MeditimerBase):
    """Ordered collection of timer templates, persisted as a single JSON blob.

    The whole collection is written on every mutation. Mutations are serialized with a fair lock so
    concurrent callers cannot interleave a read-modify-write.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        key: str = DEFAULT_TEMPLATES_KEY,
        log_level: LOG_LEVELS | None = None,
    ) -> None:
        super().__init__(log_level=log_level)
        self.kv = kv
        self.key = key

        self._lock = FairAsyncRLock()
        self._templates: list[TimerTemplate] = []

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self):
        return iter(list(self._templates))

    def __contains__(self, template_id: object) -> bool:
        return any(t.id == template_id for t in self._templates)

    @property
    def templates(self) -> list[TimerTemplate]:
        """Copy of the templates in insertion order."""
        return list(self._templates)

    async def load(self) -> list[TimerTemplate]:
        """Load the collection from the key-value store, replacing anything held in memory.

        A missing key yields an empty collection. A blob that cannot be decoded is logged and also yields an
        empty collection; it is left untouched until the next mutation overwrites it.
        """
        async with self._lock:
            raw = await self.kv.get(self.key)
            if raw is None:
                self.logger.debug("No templates stored under %r", self.key)
                self._templates = []
                return self.templates

            try:
                self._templates = TemplateList.validate_json(raw)
            except ValidationError as e:
                self.logger.error("Stored templates under %r could not be decoded, starting empty: %s", self.key, e)
                self._templates = []

            self.logger.info("Loaded %d timer templates", len(self._templates))
            return self.templates

    async def save(self) -> None:
        """Persist the current collection."""
        async with self._lock:
            await self._persist(self._templates)

    async def _persist(self, templates: list[TimerTemplate]) -> None:
        """Write `templates` and, only once that succeeded, make them the in-memory collection."""
        await self.kv.set(self.key, TemplateList.dump_json(templates, by_alias=True).decode())
        self._templates = templates
        self.logger.debug("Persisted %d timer templates", len(templates))

    def get(self, template_id: UUID) -> TimerTemplate:
        """Return the template with `template_id`.

        Raises:
            TemplateNotFoundError: If no such template exists.
        """
        for template in self._templates:
            if template.id == template_id:
                return template
        raise TemplateNotFoundError(template_id)

    def find_by_name(self, name: str) -> TimerTemplate:
        """Return the first template named `name`, compared case-insensitively.

        Raises:
            TemplateNotFoundError: If no such template exists.
        """
        folded = name.casefold()
        for template in self._templates:
            if template.name.casefold() == folded:
                return template
        raise TemplateNotFoundError(name)

    async def add(self, template: TimerTemplate) -> TimerTemplate:
        """Append a new template and persist.

        Raises:
            DuplicateTemplateError: If a template with the same id is already stored.
        """
        async with self._lock:
            if template.id in self:
                raise DuplicateTemplateError(template.id)
            await self._persist([*self._templates, template])

        self.logger.info("Added timer template %s", template)
        return template

    async def replace(self, template: TimerTemplate) -> TimerTemplate:
        """Swap the stored template that has the same id for `template` and persist.

        Raises:
            TemplateNotFoundError: If no template with that id is stored.
        """
        async with self._lock:
            index = self._index_of(template.id)
            templates = list(self._templates)
            templates[index] = template
            await self._persist(templates)

        self.logger.info("Updated timer template %s", template)
        return template

    async def upsert(self, template: TimerTemplate) -> TimerTemplate:
        """Replace the template if its id is stored, otherwise add it."""
        async with self._lock:
            if template.id in self:
                return await self.replace(template)
            return await self.add(template)

    async def delete(self, template_id: UUID) -> TimerTemplate:
        """Remove a template and persist.

        Raises:
            TemplateNotFoundError: If no template with that id is stored.
        """
        async with self._lock:
            index = self._index_of(template_id)
            templates = list(self._templates)
            removed = templates.pop(index)
            await self._persist(templates)

        self.logger.info("Deleted timer template %s", removed)
        return removed

    def _index_of(self, template_id: UUID) -> int:
        for index, template in enumerate(self._templates):
            if template.id == template_id:
                return index
        raise TemplateNotFoundError(template_id)
