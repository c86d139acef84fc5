from .exam_download import run_periods, summarize

__all__ = ["run_periods", "summarize"]
