"""
Run orchestration for RoundTrip searches.

Validates grid sizes, runs the search engine, reports progress and
summaries on a rich console and keeps the results store up to date.
"""

import os
import time
import traceback
from typing import List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from roundtrip.core.engine import SearchResult, solve
from roundtrip.core.topology import GridTopology
from roundtrip.core.tours import render_ascii
from roundtrip.visualization import render_gallery, render_tours

from .config import AppConfig
from .results import GridRun, ResultStore, grid_key


def format_time(seconds: float) -> str:
    """Format seconds as human-readable time."""
    if seconds == float("inf"):
        return "unknown"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    if hours > 0:
        return f"{hours}h {minutes}m {int(secs)}s"
    elif minutes > 0:
        return f"{minutes}m {int(secs)}s"
    else:
        return f"{secs:.3f}s"


class RoundTripRunner:
    """
    Runs grid searches and reports them.

    Features:
    - Grid validation against the configured limits
    - Progress lines while a long search is running
    - Counter summary table per grid
    - ASCII / PNG output of recorded tours
    - JSON results store with resume for batch runs
    """

    def __init__(
        self,
        config: AppConfig,
        console: Optional[Console] = None,
        store: Optional[ResultStore] = None,
        verbose: bool = False,
    ):
        """
        Initialize the runner.

        Args:
            config: Loaded configuration
            console: Console to report on (default: a new stdout console)
            store: Results store (default: from config, if saving is enabled)
            verbose: Print the topology before each search
        """
        self.config = config
        self.console = console or Console()
        if store is None and config.output.save_results:
            store = ResultStore(config.output.results_path)
        self.store = store
        self.verbose = verbose

    # ---------- Single grid ----------

    def _record_options(self) -> Tuple[bool, Optional[int]]:
        """Whether to keep tours, and how many."""
        search, output = self.config.search, self.config.output
        if search.record_tours:
            return True, search.record_limit
        wanted = max(output.show_limit, output.render_limit, output.gallery_limit)
        return wanted > 0, wanted or None

    def _on_progress(self, elapsed: float, count: int) -> None:
        self.console.print(f"[Progress] {format_time(elapsed)}: {count:,} tours")

    def _describe_topology(self, n: int, m: int) -> None:
        topo = GridTopology(n, m)
        self.console.print(f"[dim]{topo.size} vertices, {topo.rim_count} on the rim, "
                           f"{topo.interior_count} interior[/dim]")
        self.console.print(f"[dim]Rim (clockwise): {list(topo.rim)}[/dim]")

    def run_grid(self, n: int, m: int) -> Tuple[GridRun, Optional[SearchResult]]:
        """
        Validate and search a single grid.

        Args:
            n: Number of columns
            m: Number of rows

        Returns:
            (GridRun, SearchResult or None when the grid was rejected or failed)
        """
        problems = self.config.limits.check(n, m)
        if problems:
            for problem in problems:
                self.console.print(f"[red]{problem}[/red]")
            self.console.print("Adjust parameters and try again!")
            return GridRun(n=n, m=m, success=False, error="; ".join(problems)), None

        if self.verbose:
            self._describe_topology(n, m)

        record, limit = self._record_options()
        search = self.config.search
        self.console.print(f"Searching solutions for {n} x {m} matrix")

        start_time = time.time()
        try:
            result = solve(
                n, m,
                record_tours=record,
                record_limit=limit,
                progress_every=search.progress_every,
                on_progress=self._on_progress,
                verify_closure=search.verify_closure,
            )
        except Exception as e:
            runtime = time.time() - start_time
            error_msg = f"{type(e).__name__}: {str(e)}\n{traceback.format_exc()}"
            run = GridRun(n=n, m=m, success=False, runtime_sec=runtime, error=error_msg)
            self._record(run)
            self.console.print(f"[FAIL] {grid_key(n, m)} - {type(e).__name__}: {e}")
            return run, None

        run = GridRun(
            n=n,
            m=m,
            success=True,
            tours=result.tours,
            metrics=result.metrics.to_dict(),
            runtime_sec=result.metrics.elapsed,
        )
        self._record(run)

        self.print_summary(result)
        self._show_tours(result)
        self._render_tours(result)
        self._render_gallery(result)
        return run, result

    def _record(self, run: GridRun) -> None:
        if self.store is not None:
            self.store.record(run)

    # ---------- Reporting ----------

    def print_summary(self, result: SearchResult) -> None:
        """Print tour count and search counters."""
        metrics = result.metrics
        self.console.print()
        self.console.print(f"[bold green]{result.tours:,} solutions found[/bold green]")

        table = Table(title=f"{result.n} x {result.m} search", show_header=True, box=box.SIMPLE)
        table.add_column("Counter", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Calls", f"{metrics.calls:,}")
        table.add_row("Rim exhausted early", f"{metrics.rim_exhausted:,}")
        table.add_row("Backtracks", f"{metrics.backtracks:,}")
        table.add_row("Unclosed paths", f"{metrics.unclosed:,}")
        table.add_row("No return edge", f"{metrics.no_return_edge:,}")
        table.add_row("Split rejections", f"{metrics.split_rejections:,}")
        table.add_row("Tours", f"{metrics.tours:,}")
        table.add_row("Run duration", format_time(metrics.elapsed))
        self.console.print(table)

    def _show_tours(self, result: SearchResult) -> None:
        limit = self.config.output.show_limit
        for k, tour in enumerate(result.paths[:limit], start=1):
            self.console.print(f"[bold]Tour #{k}[/bold]")
            self.console.print(render_ascii(result.n, result.m, tour), markup=False, highlight=False)
            self.console.print()

    def _render_tours(self, result: SearchResult) -> None:
        limit = self.config.output.render_limit
        if limit <= 0 or not result.paths:
            return
        out_dir = os.path.join(self.config.output.output_dir, "renders")
        paths = render_tours(result.n, result.m, result.paths, out_dir, limit=limit)
        self.console.print(f"[dim]Rendered {len(paths)} tours to {out_dir}[/dim]")

    def _render_gallery(self, result: SearchResult) -> None:
        limit = self.config.output.gallery_limit
        if limit <= 0 or not result.paths:
            return
        path = os.path.join(self.config.output.output_dir, "renders", f"gallery_{result.n}x{result.m}.png")
        render_gallery(result.n, result.m, result.paths[:limit], path)
        self.console.print(f"[dim]Gallery of {min(limit, len(result.paths))} tours saved to {path}[/dim]")

    def print_status(self) -> None:
        """Print every run kept in the results store."""
        if self.store is None:
            self.console.print("[yellow]Results store is disabled[/yellow]")
            return

        runs = self.store.runs()
        if not runs:
            self.console.print(f"No runs recorded in {self.store.path}")
            return

        table = Table(title="Recorded runs", show_header=True, box=box.ROUNDED)
        table.add_column("Grid", style="cyan")
        table.add_column("Status")
        table.add_column("Tours", justify="right")
        table.add_column("Calls", justify="right")
        table.add_column("Runtime", justify="right")
        for run in runs:
            status = "[green]OK[/green]" if run.success else "[red]FAIL[/red]"
            tours = f"{run.tours:,}" if run.tours is not None else "-"
            calls = f"{run.metrics['calls']:,}" if "calls" in run.metrics else "-"
            runtime = format_time(run.runtime_sec) if run.runtime_sec is not None else "-"
            table.add_row(run.key, status, tours, calls, runtime)
        self.console.print(table)

    # ---------- Batch ----------

    def run_batch(
        self,
        grids: Optional[Sequence[Tuple[int, int]]] = None,
        resume: bool = False,
    ) -> List[GridRun]:
        """
        Search every grid in turn.

        Args:
            grids: Grid sizes to run (default: the configured list)
            resume: Skip grids already completed in the results store

        Returns:
            List of GridRun, one per grid attempted
        """
        grids = list(self.config.grids if grids is None else grids)
        if resume and self.store is not None:
            done = self.store.completed_keys()
            pending = [g for g in grids if grid_key(*g) not in done]
        else:
            pending = grids

        self.console.print(Panel.fit(
            f"[bold cyan]RoundTrip batch[/bold cyan]\n"
            f"Grids: {len(grids)} | Pending: {len(pending)}",
            box=box.ROUNDED,
        ))

        runs = []
        start_time = time.time()
        for n, m in pending:
            run, _ = self.run_grid(n, m)
            runs.append(run)
            if run.success:
                self.console.print(f"[OK] {run.key} - tours={run.tours:,} "
                                   f"time={format_time(run.runtime_sec)}")
            else:
                error_short = run.error.split("\n")[0] if run.error else "Unknown error"
                self.console.print(f"[FAIL] {run.key} - {error_short}")

        failed = sum(1 for r in runs if not r.success)
        self.console.print(f"\n[bold]Batch complete[/bold] in {format_time(time.time() - start_time)}: "
                           f"{len(runs) - failed} completed, {failed} failed")
        return runs
