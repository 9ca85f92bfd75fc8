import os

from dirmonitor import Monitor

# Watch ~/ahora and print every change.
monitor = Monitor(os.path.join(os.path.expanduser("~"), "ahora"), interval=1.0)


def print_change(event):
    print(f"{event.kind.value} {event.file_path}")


monitor.register("all", print_change)

try:
    monitor.start()
except KeyboardInterrupt:
    monitor.stop()
