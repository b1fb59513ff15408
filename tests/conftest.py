# tests/conftest.py
import logging
import sys
from pathlib import Path

import pytest

# --- 1. Add project root to PYTHONPATH ---
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)  # Basic config for test logs

from postrev.core.domain.entities import Document  # noqa: E402
from postrev.infrastructure.persistence.sqlalchemy.base import (  # noqa: E402
    make_session_factory,
)
from postrev.settings import settings as global_app_settings  # noqa: E402


# --- 2. Sample corpus ---------------------------------------------------------
SPARK_V1 = """---
title: "Apache Spark serialize"
date: 2019-03-04
categories:
  - spark
tags: [spark, serialization, kryo]
---

Apache Spark has to serialze every closure that is shipped to the exectors.
When a task captures a field of an enclosing class, the whole outer object is
serialized too, and if that class is not serializable the job fails  with a
Task not serializable exception. The usual fixes are to copy the field into a
local variable before using it inside the closure, to mark the class as
Serializable, or to switch to the Kryo serializer and register the classes you
need. Kryo is faster and more compact than Java serialization, but it requries
registration for the best results.
"""

SPARK_V2 = """---
title: "Apache Spark serialization tips"
date: 2019-03-10
categories:
  - spark
tags: [spark, serialization, kryo]
---

Apache Spark has to serialize every closure that is shipped to the executors.
When a task captures a field of an enclosing class, the whole outer object is
serialized too, and if that class is not serializable the job fails with a Task
not serializable exception.

The usual fixes are to copy the field into a local variable before using it
inside the closure, to mark the class as Serializable, or to switch to the Kryo
serializer and register the classes you need. Kryo is faster and more compact
than Java serialization, but it requires registration for the best results.
"""

HARDWARE = """---
title: "Workstation build log"
categories: [hardware]
tags: [build, pc]
---

This weekend I finally finished the new workstation. The case is a compact mid
tower with room for three intake fans. I reused the old power supply, added a
second NVMe drive for scratch data and replaced the stock cooler with a large
tower cooler. Cable management took longer than the rest of the build combined.
"""

CHM_V1 = """---
title: "ConcurrentHashMap vs synchronizedMap"
categories: [java]
---

Collections.synchronizedMap wraps every method in a single lock, so readers and
writers block each other. ConcurrentHashMap splits the table into independently
locked bins and lets reads proceed without locking at all.
"""

CHM_V2 = CHM_V1 + """
Iterators over a ConcurrentHashMap are weakly consistent and never throw
ConcurrentModificationException, while iterating a synchronizedMap requires
holding the map lock manually.
"""

MALFORMED = """---
title: "Never closed"
tags: [oops]

Body that will never be reached.
"""

EMPTY = """---
title: "Placeholder"
---
"""


@pytest.fixture
def corpus() -> dict:
    """Relative path -> raw text for the sample posts directory."""
    return {
        "2019-03-04-apache-spark-serialize.md": SPARK_V1,
        "2019-03-10-spark-serialization-tips.md": SPARK_V2,
        "2019-05-01-concurrenthashmap-vs-synchronizedmap.md": CHM_V1,
        "2020-01-15-workstation-build-log.md": HARDWARE,
        "broken.md": MALFORMED,
        "drafts/2019-05-01-concurrenthashmap-vs-synchronizedmap.md": CHM_V2,
        "empty.md": EMPTY,
    }


@pytest.fixture
def posts_dir(tmp_path: Path, corpus: dict) -> Path:
    root = tmp_path / "posts"
    for rel, text in corpus.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8", newline="") as fh:
            fh.write(text)
    logger.info(f"CONFTEST: wrote {len(corpus)} posts under {root}")
    return root


@pytest.fixture
def make_doc():
    """Factory for Documents built directly from a body."""

    def _make(slug, body, seq=0, path=None, front_matter=None):
        return Document(
            slug=slug,
            raw_text=body,
            front_matter=front_matter or {},
            body=body,
            path=path,
            seq=seq,
        )

    return _make


# --- 3. DB --------------------------------------------------------------------
@pytest.fixture(scope="function")
def session_factory():
    """Fresh in-memory SQLite (StaticPool) with the schema created."""
    return make_session_factory("sqlite:///:memory:")


# --- 4. Settings are global: restore them after every test ---------------------
@pytest.fixture(autouse=True)
def restore_settings():
    saved = global_app_settings.model_dump()
    yield
    for key, value in saved.items():
        setattr(global_app_settings, key, value)
