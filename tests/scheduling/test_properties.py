"""Property tests for scheduler ordering and clock guarantees.

Critical Invariants:
- No pending task is ever scheduled before the clock
- advance_by(d) ends with clock == previous + d
- Tasks run in non-decreasing runs_at order, never before their runs_at
- Cancelled tasks never run
- Draining with step_one equals advance_by(0)
"""

from datetime import timedelta

from hypothesis import given, settings
from hypothesis import strategies as st

from tickwork import SchedulerConfig, VirtualScheduler

delays = st.integers(min_value=-3, max_value=20)


@st.composite
def plan_strategy(draw):
    """Generate (delay, cancel?) pairs plus a list of advance steps."""
    tasks = draw(st.lists(st.tuples(delays, st.booleans()), max_size=25))
    steps = draw(st.lists(st.integers(min_value=0, max_value=8), min_size=1, max_size=6))
    seed = draw(st.integers(min_value=0, max_value=2**32))
    return tasks, steps, seed


@given(plan=plan_strategy())
@settings(max_examples=75)
def test_ordering_clock_and_cancellation(plan):
    tasks, steps, seed = plan
    s = VirtualScheduler(config=SchedulerConfig(seed=seed))
    start = s.now()
    ran: list[tuple[int, timedelta, timedelta]] = []
    cancelled: set[int] = set()

    for index, (delay, cancel_it) in enumerate(tasks):
        due = start + timedelta(seconds=max(delay, 0))

        def action(index=index, due=due):
            ran.append((index, due, s.now()))

        cancel = s.schedule_after(delay, action)
        if cancel_it:
            cancel()
            cancelled.add(index)

    for step in steps:
        before = s.now()
        s.advance_by(step)
        assert s.now() == before + timedelta(seconds=step)
        head = s.state.next_runs_at
        assert head is None or head > s.now()

    dues = [due for _, due, _ in ran]
    assert dues == sorted(dues), "Distinct runs_at must never be reordered"
    for index, due, observed in ran:
        assert observed == due
        assert index not in cancelled

    total = start + timedelta(seconds=sum(steps))
    expected = {
        i
        for i, (delay, cancel_it) in enumerate(tasks)
        if not cancel_it and start + timedelta(seconds=max(delay, 0)) <= total
    }
    assert {index for index, _, _ in ran} == expected


@given(count=st.integers(min_value=0, max_value=15), seed=st.integers(min_value=0, max_value=1000))
def test_step_one_drain_matches_advance_zero(count, seed):
    def build():
        s = VirtualScheduler(config=SchedulerConfig(seed=seed))
        order = []
        for i in range(count):
            s.submit(lambda i=i: order.append(i))
        s.schedule_after(1, lambda: order.append("later"))
        return s, order

    stepped, stepped_order = build()
    steps = 0
    while stepped.step_one():
        steps += 1

    advanced, advanced_order = build()
    advanced.advance_by(0)

    assert steps == count
    assert stepped_order == advanced_order
    assert stepped.now() == advanced.now()
    assert stepped.state.pending_count == advanced.state.pending_count == 1
