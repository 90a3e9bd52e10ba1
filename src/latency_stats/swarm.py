"""Load generator producing TTC/TTFB measurements.

Each worker thread runs its own event loop. A worker first opens its share of
idle connections and waits until all of them are established, then fires its
share of active requests concurrently. Every active request uses a fresh
connection and records two durations measured from the moment the connect
starts: time to connect and time to first response byte, both in
nanoseconds. A request whose response carries no bytes reports a ttfb of -1.

The output is one ``ttc ttfb`` line per active request, the format read by the
percentile and histogram reports.
"""

from __future__ import annotations

import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from latency_stats.models import Measurement

if TYPE_CHECKING:
    from latency_stats.models import SwarmPlan

logger = logging.getLogger("latency_stats.swarm")

RESP_BUF_SIZE = 4096


def split_evenly(total: int, parts: int) -> list[int]:
    """Split ``total`` into ``parts`` shares differing by at most one."""
    base, remainder = divmod(total, parts)
    return [base + (1 if i < remainder else 0) for i in range(parts)]


async def timed_request(host: str, port: int, request: bytes) -> Measurement:
    """Send one request on a new connection and time connect and first byte."""
    start = time.perf_counter_ns()
    reader, writer = await asyncio.open_connection(host, port)
    ttc = time.perf_counter_ns() - start
    ttfb = -1

    try:
        writer.write(request)
        await writer.drain()
        # Some servers only close once the write side is shut down
        if writer.can_write_eof():
            writer.write_eof()

        while chunk := await reader.read(RESP_BUF_SIZE):
            if ttfb == -1:
                ttfb = time.perf_counter_ns() - start
            logger.debug("%s:%d read %d bytes", host, port, len(chunk))
    finally:
        writer.close()
        await writer.wait_closed()

    return Measurement(ttc=ttc, ttfb=ttfb)


class Driver:
    """One worker's share of idle and active connections."""

    def __init__(self, plan: SwarmPlan, nactive: int, nidle: int) -> None:
        self.plan = plan
        self.nactive = nactive
        self.nidle = nidle

    async def _open_idle(self) -> list[asyncio.StreamWriter]:
        if not self.nidle:
            return []
        logger.debug("Creating %d idle connections", self.nidle)
        start = time.perf_counter_ns()
        conns = await asyncio.gather(
            *(asyncio.open_connection(self.plan.host, self.plan.port) for _ in range(self.nidle))
        )
        logger.debug(
            "All idle connections established. Took %d nsecs.", time.perf_counter_ns() - start
        )
        return [writer for _, writer in conns]

    async def run(self) -> list[Measurement]:
        idle = await self._open_idle()
        request = self.plan.request()
        try:
            logger.debug("Creating %d active connections", self.nactive)
            results = await asyncio.gather(
                *(
                    timed_request(self.plan.host, self.plan.port, request)
                    for _ in range(self.nactive)
                )
            )
        finally:
            for writer in idle:
                writer.close()
            await asyncio.gather(*(writer.wait_closed() for writer in idle))
        return list(results)


def _run_driver(driver: Driver) -> list[Measurement]:
    return asyncio.run(driver.run())


def run_swarm(plan: SwarmPlan) -> list[Measurement]:
    """Run every worker to completion; results come back grouped by worker."""
    drivers = [
        Driver(plan, nactive, nidle)
        for nactive, nidle in zip(
            split_evenly(plan.nactive, plan.nthreads),
            split_evenly(plan.nidle, plan.nthreads),
            strict=True,
        )
    ]
    logger.info(
        "Running %d active and %d idle connections against %s:%d on %d threads",
        plan.nactive,
        plan.nidle,
        plan.host,
        plan.port,
        plan.nthreads,
    )
    with ThreadPoolExecutor(max_workers=plan.nthreads, thread_name_prefix="swarm") as pool:
        batches = list(pool.map(_run_driver, drivers))
    return [m for batch in batches for m in batch]


def format_measurements(measurements: list[Measurement]) -> list[str]:
    return [f"{m.ttc} {m.ttfb}" for m in measurements]
