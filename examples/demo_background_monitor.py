import sys
import tempfile
import time
from pathlib import Path

from dirmonitor import Monitor
from dirmonitor.utils import spawn_monitor

# Monitor a scratch directory from a background thread.
root = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(tempfile.mkdtemp())
monitor = Monitor(root, interval=0.5)
monitor.register("created", lambda e: print(f"Created: {e.file_path}"))
monitor.register("updated", lambda e: print(f"Updated: {e.file_path}"))
monitor.register("deleted", lambda e: print(f"Deleted: {e.file_path}"))

worker = spawn_monitor(monitor)
time.sleep(1)

# Simulate some changes.
(root / "notes.txt").write_text("hello")
time.sleep(1)
(root / "notes.txt").write_text("world")
time.sleep(1)
(root / "notes.txt").unlink()
time.sleep(1)

# Stop the thread gracefully.
worker.stop()
worker.join()
print("Monitor stopped.")
