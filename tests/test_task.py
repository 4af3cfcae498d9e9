import threading
import time

from phaserunner_modbus.task import Task


class Recorder(Task):
    def __init__(self, limit):
        super().__init__()
        self.limit = limit
        self.events = []

    def setup(self):
        self.events.append("setup")

    def run(self):
        self.events.append("run")
        if self.events.count("run") >= self.limit:
            self.stop()

    def cleanup(self):
        self.events.append("cleanup")


class Waiter(Task):
    def __init__(self):
        super().__init__()
        self.cycles = 0
        self.entered = threading.Event()

    def run(self):
        self.cycles += 1
        self.entered.set()
        self.suspend()


class Sleeper(Task):
    def run(self):
        self.sleep(60_000)


def test_lifecycle_order():
    task = Recorder(3)
    assert Task.start(task, "recorder") is True
    assert Task.join(task, 2.0) is True
    assert task.events == ["setup", "run", "run", "run", "cleanup"]
    assert task.name == "recorder"


def test_start_twice_while_running_is_refused():
    task = Sleeper()
    assert Task.start(task, "sleeper") is True
    assert Task.start(task, "sleeper") is False
    Task.stop(task)
    assert Task.join(task, 2.0) is True
    assert task.running is False


def test_suspend_blocks_until_resume():
    task = Waiter()
    Task.start(task, "waiter")
    assert task.entered.wait(2.0)
    time.sleep(0.05)
    assert task.cycles == 1

    task.entered.clear()
    Task.resume(task)
    assert task.entered.wait(2.0)
    assert task.cycles == 2

    Task.stop(task)
    assert Task.join(task, 2.0) is True


def test_stop_interrupts_sleep():
    task = Sleeper()
    Task.start(task, "sleeper")
    time.sleep(0.05)
    started = time.monotonic()
    Task.stop(task)
    assert Task.join(task, 2.0) is True
    assert time.monotonic() - started < 2.0
    assert task.stopped is True


def test_join_without_start_reports_finished():
    task = Task()
    assert task.join(0.1) is True
    assert task.running is False


def test_restart_after_stop():
    task = Recorder(1)
    Task.start(task, "first")
    assert Task.join(task, 2.0) is True
    task.limit = 2
    assert Task.start(task, "second") is True
    assert Task.join(task, 2.0) is True
    assert task.events.count("setup") == 2
    assert task.events.count("cleanup") == 2