import time
from time import sleep

import underbar as _
from underbar.utils import setup_logging, measure_performance, get_performance_summary

logger = setup_logging()


def expensive_square(x):
    # Simulate a costly step so memoization is visible
    print(f"  computing f({x}) ...")
    sleep(0.2)
    return x * x


print("\n--- Demo: collection operations ---")
people = [
    {"name": "moe", "age": 40},
    {"name": "larry", "age": 50},
    {"name": "curly", "age": 60},
]
print("pluck ages:", _.pluck(people, "age"))
print("sum of ages:", _.reduce(_.pluck(people, "age"), lambda a, b: a + b))
print("over 45:", _.pluck(_.filter(people, lambda p: p["age"] > 45), "name"))
print("uniq:", _.uniq([1, 2, 2, 3, 1]))
print("zip:", _.zip(["a", "b", "c"], [1, 2]))
print("flatten:", _.flatten([1, [2, [3, [4]], 5]]))
print("intersection:", _.intersection([1, 2, 3], [2, 3, 4]))
print("difference:", _.difference([1, 2, 3, 4], [2, 4]))
print("shuffle:", _.shuffle(list(range(10))))

print("\n--- Demo: memoize (second pass reuses results) ---")
fast_square = _.memoize(expensive_square)
t0 = time.perf_counter()
print("First pass:", _.map([1, 2, 3], fast_square))
t1 = time.perf_counter()
print("Second pass:", _.map([1, 2, 3], fast_square))
t2 = time.perf_counter()
print(f"First pass time: {t1 - t0:.2f}s, second pass time: {t2 - t1:.4f}s")

print("\n--- Demo: once ---")
init = _.once(lambda: print("  initializing ...") or "ready")
print("Results:", [init(), init(), init()])

print("\n--- Demo: throttle (5 rapid calls, one runs) ---")
ping = _.throttle(lambda: print("  ping"), 100)
for _i in range(5):
    ping()
sleep(0.15)
print("After 150ms:")
ping()

print("\n--- Demo: delay ---")
_.delay(print, 50, "  delayed hello after 50ms")
print("Scheduled (not blocking)...")
sleep(0.1)

print("\n--- Demo: measuring operations ---")
data = list(range(50_000))
for name, op in [
    ("map", lambda: _.map(data, lambda x: x * 2)),
    ("filter", lambda: _.filter(data, lambda x: x % 3 == 0)),
    ("shuffle", lambda: _.shuffle(data)),
]:
    report = measure_performance(name, op)
    print(f"  {report.operation}: {report.execution_time_ms:.2f} ms, {report.memory_usage_mb:.2f} MB")

summary = get_performance_summary()
logger.info(f"Measured {summary['total_operations']} operations, avg {summary['avg_time_ms']:.2f} ms")
