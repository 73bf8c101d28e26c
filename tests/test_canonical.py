from fc_client.canonical import build_canonical_headers, compose_string_to_sign

DATE = "Tue, 15 Nov 1994 08:12:31 GMT"


def test_compose_minimal_get():
    headers = {"date": DATE, "host": "acct.cn-shanghai.example.com"}
    canonical = compose_string_to_sign("GET", "/2016-08-15/services", headers)
    assert canonical == f"GET\n\n\n{DATE}\n/2016-08-15/services"


def test_compose_includes_md5_type_and_fc_headers():
    headers = {
        "content-md5": "bWQ1",
        "content-type": "application/json",
        "date": DATE,
        "X-Fc-Trace-Id": "t-1",
        "x-fc-account-id": "123456",
        "user-agent": "ignored",
    }
    canonical = compose_string_to_sign("POST", "/2016-08-15/services", headers)
    assert canonical == (
        f"POST\nbWQ1\napplication/json\n{DATE}\n"
        "x-fc-account-id:123456\n"
        "x-fc-trace-id:t-1\n"
        "/2016-08-15/services"
    )


def test_header_order_does_not_matter():
    first = {"date": DATE, "x-fc-b": "2", "x-fc-a": "1", "content-type": "text/plain"}
    second = {"content-type": "text/plain", "x-fc-a": "1", "x-fc-b": "2", "date": DATE}
    assert compose_string_to_sign("GET", "/p", first) == compose_string_to_sign("GET", "/p", second)


def test_canonical_headers_lowercase_and_stable_for_duplicates():
    headers = {" X-FC-Zeta ": "z", "x-fc-alpha": "first", "X-Fc-Alpha": "second"}
    assert build_canonical_headers(headers) == "x-fc-alpha:first\nx-fc-alpha:second\nx-fc-zeta:z\n"


def test_path_is_unescaped():
    canonical = compose_string_to_sign("GET", "/2016-08-15/proxy/svc/fn/a%20b", {"date": DATE})
    assert canonical.endswith("/2016-08-15/proxy/svc/fn/a b")


def test_missing_date_uses_placeholder():
    assert compose_string_to_sign("GET", "/p", {}) == "GET\n\n\nundefined\n/p"


def test_queries_are_exploded_and_sorted():
    queries = {"b": ["2", "1"], "a": "x", "skip": 3}
    canonical = compose_string_to_sign("GET", "/p", {"date": DATE}, queries)
    assert canonical == f"GET\n\n\n{DATE}\n/p\na=x\nb=1\nb=2"


def test_query_order_does_not_matter():
    first = {"z": "1", "a": ["3", "2"]}
    second = {"a": ["2", "3"], "z": "1"}
    assert compose_string_to_sign("GET", "/p", {"date": DATE}, first) == compose_string_to_sign(
        "GET", "/p", {"date": DATE}, second
    )


def test_empty_query_mapping_appends_separator():
    assert compose_string_to_sign("GET", "/p", {"date": DATE}, {}) == f"GET\n\n\n{DATE}\n/p\n"
