"""Reconciliation of extracted records against the seen-set."""

import logging
from typing import Iterable, Iterator, List, Sequence

from .agent import fetch_candidates
from .config import AgentConfig
from .db import NoveltyStore, utc_now
from .errors import AgentCallError, StoreAccessError
from .identity import build_identity
from .llm_client import LLMClient
from .models import CandidateRecord, IdentifiedRecord, RunReport, SourceDefinition

logger = logging.getLogger(__name__)


class ReconciliationEngine:
    """
    Runs one pass over the configured sources.

    For every source the agent is asked for the current listing, each
    record gets its identity, and identities missing from the store are
    inserted and reported as new. The store is only touched from this
    class and only from one thread.
    """

    def __init__(self, store: NoveltyStore, llm_client: LLMClient, agent_config: AgentConfig):
        self.store = store
        self.llm_client = llm_client
        self.agent_config = agent_config

    def iter_new(self, source: SourceDefinition, candidates: Sequence[CandidateRecord]) -> Iterator[IdentifiedRecord]:
        """
        Yield candidates never seen before, inserting each into the store.

        Every new record is written before it is yielded and before the
        next candidate is looked at, so duplicates inside the same batch
        are caught by the same check.

        Raises:
            StoreAccessError: If the store cannot be read or written.
        """
        for candidate in candidates:
            title = candidate.title
            if not title or not title.strip():
                logger.debug(f"[{source.name}] Skipping candidate without title: {candidate}")
                continue

            deadline = candidate.deadline or ""
            identity = build_identity(source.name, title, deadline)

            if self.store.get(identity) is not None:
                continue
            if not self.store.add(identity, title, deadline, source.name):
                # Inserted by another writer since the lookup
                continue

            logger.info(f"[{source.name}] NEW: {title[:60]}")
            yield IdentifiedRecord(
                identity=identity,
                source_name=source.name,
                title=title,
                deadline=deadline,
                reference=candidate.reference,
                description=candidate.description,
            )

    def reconcile(self, source: SourceDefinition, candidates: Sequence[CandidateRecord]) -> List[IdentifiedRecord]:
        """
        Filter candidates down to the ones never seen before.

        Args:
            source: Source the candidates came from.
            candidates: Extracted records, in agent order.

        Returns:
            The new records, in input order.

        Raises:
            StoreAccessError: If the store cannot be read or written.
        """
        return list(self.iter_new(source, candidates))

    def process_source(self, source: SourceDefinition, report: RunReport) -> None:
        """
        Fetch, extract and reconcile a single source into ``report``.

        Records are added to the report as they are committed, so a store
        failure part-way through keeps the already-committed ones in the
        notification batch.
        """
        try:
            candidates = fetch_candidates(source, self.llm_client, self.agent_config)
        except AgentCallError as e:
            logger.warning(f"{e}; treating source as empty")
            report.failed_sources[source.name] = str(e)
            candidates = []

        report.candidates_by_source[source.name] = len(candidates)
        report.new_by_source[source.name] = 0
        for record in self.iter_new(source, candidates):
            report.new_records.append(record)
            report.new_by_source[source.name] += 1

    def run(self, sources: Iterable[SourceDefinition]) -> RunReport:
        """
        Process every source in order.

        Agent failures make a source count as empty. A store failure or
        any other error aborts the current source only; rows already
        written for it and for earlier sources are kept, stay in the
        report, and the remaining sources still run.

        Returns:
            A RunReport with every new record found in this pass.
        """
        sources = list(sources)
        report = RunReport()

        for index, source in enumerate(sources, 1):
            logger.info(f"[{index}/{len(sources)}] Checking {source.name} ({source.url})...")
            try:
                self.process_source(source, report)
            except StoreAccessError as e:
                logger.error(f"[{source.name}] Store failure, aborting source: {e}", exc_info=True)
                report.failed_sources[source.name] = str(e)
            except Exception as e:
                # Continue with other sources even if one fails
                logger.error(f"[{source.name}] Unexpected error, skipping source: {e}", exc_info=True)
                report.failed_sources[source.name] = f"{type(e).__name__}: {e}"

        try:
            self.store.set_meta("last_run", utc_now())
        except StoreAccessError as e:
            logger.error(f"Could not record last run time: {e}")

        logger.info(
            f"Pass finished: {report.total_new} new record(s) across {len(sources)} source(s), "
            f"{len(report.failed_sources)} source(s) with errors"
        )
        return report
