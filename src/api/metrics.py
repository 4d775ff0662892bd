from prometheus_client import Counter, Histogram, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        # Try to create it
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        # If it already exists, retrieve it from the registry
        return REGISTRY._names_to_collectors[name]


REQUESTS_TOTAL = get_or_create_metric(
    "planner_requests_total",
    "Total requests",
    Counter,
    labelnames=["endpoint", "status"],
)

REQUEST_LATENCY_SECONDS = get_or_create_metric(
    "planner_request_latency_seconds",
    "Request latency",
    Histogram,
    labelnames=["endpoint"],
)

PLANS_GENERATED_TOTAL = get_or_create_metric(
    "planner_plans_generated_total", "Total study plans generated", Counter
)

TASKS_SCHEDULED_TOTAL = get_or_create_metric(
    "planner_tasks_scheduled_total", "Total tasks placed into a study plan", Counter
)

TASKS_DROPPED_TOTAL = get_or_create_metric(
    "planner_tasks_dropped_total", "Total tasks that did not fit into the week", Counter
)

ENHANCEMENTS_TOTAL = get_or_create_metric(
    "planner_enhancements_total",
    "Plan narrative enhancement outcomes",
    Counter,
    labelnames=["outcome"],
)

SAVED_PLANS_TOTAL = get_or_create_metric(
    "planner_saved_plans_total", "Total plans saved", Counter
)
