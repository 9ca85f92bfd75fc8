"""
This module provides a thread wrapper for running a Monitor in the background.

The monitor loop itself stays single-threaded; the thread only lets a caller
keep doing other work while it runs and stop it cooperatively.
"""

import logging
import threading


class MonitorThread(threading.Thread):
    """
    A daemon thread that runs Monitor.start() until stopped.
    """

    def __init__(self, monitor):
        """
        Initialize the monitor thread.

        Args:
            monitor (Monitor): The monitor to run.
        """
        super().__init__(name=f"MonitorThread-{monitor.directory}")
        self.monitor = monitor
        self.error = None
        self.daemon = True  # Runs as a daemon thread so it will exit when the main program exits.

    def run(self):
        logging.debug("MonitorThread started for %s", self.monitor.directory)
        try:
            self.monitor.start()
        except Exception as e:
            # A listener failure ends the loop; keep it for the owner to inspect.
            self.error = e
            logging.exception("Monitor loop for %s failed: %s", self.monitor.directory, e)
        logging.debug("MonitorThread stopped.")

    def stop(self):
        """
        Signal the monitor to stop.
        """
        logging.debug("MonitorThread received stop signal.")
        self.monitor.stop()


def spawn_monitor(monitor):
    """
    Factory function to start a monitor in a background thread.

    Args:
        monitor (Monitor): The monitor to run.

    Returns:
        MonitorThread: The running thread instance.
    """
    worker = MonitorThread(monitor)
    worker.start()
    logging.debug("spawn_monitor: Started a new MonitorThread.")
    return worker
