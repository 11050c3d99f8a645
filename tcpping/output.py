# tcpping/output.py
import json
import sys

from tcpping.schemas import ProbeOutcome


def _ms(value) -> str:
    return f"{value if value is not None else 0.0:.3f}"


class Presenter:
    """
    Renders probe outcomes and the final summary.

    mode: "normal" (every probe + summary), "quiet" (header + summary),
    "csv" (one summary line) or "json" (summary object).
    """

    def __init__(self, mode: str = "normal", bell: bool = False, stream=None):
        self.mode = mode
        self.bell = bell
        self.out = stream or sys.stdout

    def _print(self, line: str = ""):
        print(line, file=self.out, flush=True)

    def header(self, target: str, address: str, port: int):
        if self.mode in ("normal", "quiet"):
            self._print(f"TCP PING {target} ({address}) tcp port {port}")

    def probe(self, seq: int, address: str, outcome: ProbeOutcome, counted: bool = True):
        if self.mode != "normal":
            return
        if outcome.status == "success":
            line = f"{address}: seq={seq} time={outcome.rtt_ms:.3f} ms"
        elif outcome.status == "timeout":
            line = f"{address}: seq={seq} timeout"
        else:
            line = f"{address}: seq={seq} connection error"
            if outcome.detail:
                line += f" ({outcome.detail})"
        if not counted:
            line += " (skipped)"
        self._print(line)
        if self.bell and outcome.ok:
            self.out.write("\a")
            self.out.flush()

    def summary(self, result: dict):
        st = result["stats"]
        if self.mode == "json":
            payload = {k: v for k, v in result.items() if k != "stats"}
            payload["stats"] = st.as_dict()
            self._print(json.dumps(payload, indent=2))
            return

        if self.mode == "csv":
            self._print(",".join([
                result["target"], result["address"], str(result["port"]),
                str(st.total_count), str(st.success_count), str(st.fail_count),
                f"{st.loss_ratio:.1f}",
                _ms(st.min_rtt), _ms(st.avg_rtt), _ms(st.max_rtt), _ms(st.jitter_avg),
            ]))
            return

        self._print(f"--- {result['target']} tcp ping statistics ---")
        self._print(
            f"{st.total_count} pings, {st.success_count} success, {st.fail_count} failed, "
            f"{st.loss_ratio:.1f}% loss, time: {result['elapsed_ms']:.3f} ms"
        )
        self._print(
            "rtt min/avg/max/range/jitter = "
            f"{_ms(st.min_rtt)}/{_ms(st.avg_rtt)}/{_ms(st.max_rtt)}/"
            f"{_ms(st.range_rtt)}/{_ms(st.jitter_avg)} ms"
        )
