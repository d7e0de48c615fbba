# profiler.py

import functools
import sys
import time

# Accumulates total time spent in named segments
# name -> [total_time, count, start_time]
_profile_accumulators: dict[str, list] = {}

enabled_profiler = True

class Profiler:
    @staticmethod
    def profile_accumulate_start(name: str):
        if enabled_profiler:
            entry = _profile_accumulators.setdefault(name, [0.0, 0, None])
            entry[2] = time.perf_counter()  # Reset start time

    @staticmethod
    def profile_accumulate_end(name: str):
        if enabled_profiler:
            entry = _profile_accumulators.get(name)
            if entry is None or entry[2] is None:
                return  # ignore unmatched end
            entry[0] += time.perf_counter() - entry[2]
            entry[1] += 1
            entry[2] = None

    @staticmethod
    def totals() -> dict[str, tuple[float, int]]:
        """Snapshot of (total seconds, call count) per segment."""
        return {name: (total, count) for name, (total, count, _) in _profile_accumulators.items()}

    @staticmethod
    def reset():
        _profile_accumulators.clear()

    @staticmethod
    def profile_accumulate_report(file=None) -> list[str]:
        """Print how the measured time was split between segments and clear
        the accumulators. Decorated functions ("f:" prefix) are listed after
        manually timed segments. Returns the printed lines."""
        lines: list[str] = []
        if not enabled_profiler:
            return lines

        grand_total = sum(total for total, count, _ in _profile_accumulators.values())
        sorted_items = sorted(_profile_accumulators.items(), key=lambda x: (x[0].startswith("f:"), x[0]))

        lines.append("==== Timing report ====")
        for name, (total, count, _) in sorted_items:
            if count == 0:
                continue
            percent = (total / grand_total) * 100 if grand_total > 0 else 0
            if percent >= 100:
                percent_str = "100%"
            elif percent >= 10:
                percent_str = f"{percent:4.1f}%"
            else:
                percent_str = f"{percent:4.2f}%"
            lines.append(f"{percent_str} - {name}: {total * 1000:.3f}ms total over {count} calls (avg {total / count * 1000:.3f}ms)")
        lines.append("==== End of report ====")

        out = sys.stderr if file is None else file
        for line in lines:
            print(line, file=out)
        _profile_accumulators.clear()
        return lines

    @staticmethod
    def timed(name=""):
        def wrapper(fn):
            label = "f:" + (name or fn.__name__)

            @functools.wraps(fn)
            def inner(*args, **kwargs):
                if not enabled_profiler:
                    return fn(*args, **kwargs)
                start = time.perf_counter()
                try:
                    return fn(*args, **kwargs)
                finally:
                    entry = _profile_accumulators.setdefault(label, [0.0, 0, None])
                    entry[0] += time.perf_counter() - start
                    entry[1] += 1
            return inner
        return wrapper
