# postrev/infrastructure/retrieval/sparse_bm25.py
import logging
from typing import List, Sequence

from rank_bm25 import BM25Okapi

from postrev.core.ports import CandidatePort
from postrev.core.services.similarity import body_tokens

logger = logging.getLogger(__name__)


class SparseBM25Candidates(CandidatePort):
    """Shortlists likely near-duplicates of each body with BM25.

    Each document's own tokens are used as the query; the top-k other
    documents sharing at least one token are returned as candidates. Token-less
    bodies are only ever candidates of each other.
    """

    def __init__(self, bodies: Sequence[str]):
        self.tokenized = [list(body_tokens(b)) for b in bodies]
        self.vocab = [set(toks) for toks in self.tokenized]
        self.empty_ids = [i for i, toks in enumerate(self.tokenized) if not toks]
        self.bm25 = None
        self.corpus_is_empty = not any(self.tokenized)

        if not self.corpus_is_empty:
            try:
                self.bm25 = BM25Okapi(self.tokenized)
            except ZeroDivisionError:
                logger.warning(
                    "BM25Okapi ZeroDivisionError despite non-empty tokenized corpus. BM25 will not be initialized.",
                    exc_info=True,
                )
                self.corpus_is_empty = True
        else:
            logger.warning("Tokenized corpus is empty. BM25 will not be initialized.")

    def candidates(self, doc_index: int, k: int) -> List[int]:
        query_tokens = self.tokenized[doc_index]
        if not query_tokens:
            return [i for i in self.empty_ids if i != doc_index]
        if self.corpus_is_empty or self.bm25 is None:
            return []

        doc_scores = self.bm25.get_scores(query_tokens)
        ranked = sorted(
            (i for i in range(len(doc_scores)) if i != doc_index),
            key=lambda i: doc_scores[i],
            reverse=True,
        )
        # small corpora can yield non-positive idf, so rank by score but
        # filter on shared vocabulary
        query_vocab = self.vocab[doc_index]
        return [i for i in ranked[:k] if query_vocab & self.vocab[i]]
