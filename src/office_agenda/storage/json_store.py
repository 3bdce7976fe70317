"""
Хранилище на JSON файлах.

Правила:
- каждый документ читается целиком и переписывается целиком
- ошибка чтения -> пустое значение документа + лог (сервис продолжает работать)
- ошибка записи -> StorageError (уходит клиенту как 500)
- запись атомарная для читателя: tmp файл в той же папке + os.replace
- read-modify-write одного документа сериализуется локом документа (только в процессе)
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from office_agenda.common.errors import StorageError
from office_agenda.common.logging import get_project_logger
from office_agenda.common.metrics import record_store_operation
from office_agenda.domain.enums import Document

log = get_project_logger()


DEFAULT_ROOMS: list[dict[str, Any]] = [
    {"id": "1", "name": "Chipicao Session Room", "meetings": []},
    {"id": "2", "name": "7Days Session Room", "meetings": []},
    {"id": "3", "name": "Middle Session Room", "meetings": []},
]


def _seed_value(doc: Document) -> list | dict:
    if doc is Document.rooms:
        return [dict(room, meetings=[]) for room in DEFAULT_ROOMS]
    return doc.empty()


class JsonStore:
    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir).resolve()
        self._locks = {doc: threading.RLock() for doc in Document}

    def path(self, doc: Document) -> Path:
        return self.data_dir / doc.filename

    def init(self) -> None:
        """
        Создаёт папку данных и недостающие документы (комнаты засеваются).
        Существующие файлы не трогаются.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for doc in Document:
            if not self.path(doc).exists():
                self.write(doc, _seed_value(doc))
                log.info("store_document_seeded", extra={"payload": {"document": doc.filename}})

    def read(self, doc: Document) -> Any:
        p = self.path(doc)
        try:
            value = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.error(
                "store_read_failed",
                extra={"payload": {"document": doc.filename, "error": str(e)[:200]}},
            )
            record_store_operation(document=doc.filename, op="read", result="fallback")
            return doc.empty()

        if not isinstance(value, type(doc.empty())):
            log.error(
                "store_read_unexpected_shape",
                extra={"payload": {"document": doc.filename, "type": type(value).__name__}},
            )
            record_store_operation(document=doc.filename, op="read", result="fallback")
            return doc.empty()

        record_store_operation(document=doc.filename, op="read", result="ok")
        return value

    def write(self, doc: Document, value: Any) -> None:
        p = self.path(doc)
        tmp_name: str | None = None
        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=p.parent)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, p)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            log.error(
                "store_write_failed",
                extra={"payload": {"document": doc.filename, "error": str(e)[:200]}},
            )
            record_store_operation(document=doc.filename, op="write", result="failed")
            raise StorageError(f"Failed to write {doc.filename}") from e
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        record_store_operation(document=doc.filename, op="write", result="ok")

    @contextmanager
    def mutate(self, doc: Document) -> Iterator[Any]:
        """
        read -> изменение на месте -> write под локом документа.

            with store.mutate(Document.visitors) as visitors:
                visitors.append({...})

        Если блок упал, запись не выполняется.
        """
        with self._locks[doc]:
            value = self.read(doc)
            yield value
            self.write(doc, value)

    @contextmanager
    def locked(self, doc: Document) -> Iterator[None]:
        """Лок документа без автоматической записи (для условных изменений)."""
        with self._locks[doc]:
            yield
