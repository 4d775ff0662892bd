def test_metrics_endpoint_exposes_prometheus_text(api_client) -> None:
    r = api_client.get("/metrics")
    assert r.status_code == 200
    # Prometheus text exposition format content-type
    assert "text/plain" in r.headers.get("content-type", "")
    body = r.text
    assert "planner_plans_generated_total" in body
    assert "planner_tasks_scheduled_total" in body
    assert "planner_tasks_dropped_total" in body


def test_plan_request_is_counted(api_client) -> None:
    body = {
        "tasks": [{"title": "Read", "course_id": "CS101"}],
        "preferences": {"dailyHours": 2},
        "useAI": False,
    }
    r = api_client.post("/plan", json=body)
    assert r.status_code == 200

    m = api_client.get("/metrics")
    assert m.status_code == 200
    lines = m.text.splitlines()
    # We avoid parsing because Prometheus text parsers can be fragile across environments.
    assert any(line.startswith('planner_requests_total{endpoint="/plan",status="ok"}') for line in lines)
    assert any(line.startswith("planner_request_latency_seconds_count{") for line in lines)
    assert any(line.startswith('planner_enhancements_total{outcome="skipped"}') for line in lines)


def test_rejected_request_is_counted_as_invalid(api_client) -> None:
    r = api_client.post("/plan", json={"tasks": []})
    assert r.status_code == 400

    lines = api_client.get("/metrics").text.splitlines()
    assert any(line.startswith('planner_requests_total{endpoint="/plan",status="invalid"}') for line in lines)
