from typing import Optional, Protocol


class AppHooks(Protocol):
    """
    Protocol for application hooks to follow and interrupt an ingestion run.
    This can be implemented by the host application, e.g. to drive a progress bar.

    Methods:
        report_step(info, target, reset_counter, plus_step) -> None:
            Report progress through the people of an upload.
        stop_requested() -> bool:
            Check whether the run should stop before the next person.
    """
    def report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 1) -> None:
        """
        Report a progress step.

        Args:
            info (str): Progress message.
            target (Optional[int]): Total number of steps, when starting a new phase.
            reset_counter (bool): Reset the step counter.
            plus_step (int): Steps completed since the last report.
        """
        pass

    def stop_requested(self) -> bool:
        """
        Check if a stop has been requested by the user.

        Returns:
            bool: True if stop is requested, False otherwise.
        """
        return False
