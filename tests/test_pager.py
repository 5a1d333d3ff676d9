"""
Collection paging over `Link: rel="next"` headers.
"""

from __future__ import annotations

from recurly_v2.resources import Account, Pager

NEXT_PAGE = '<https://api.recurly.com/v2/accounts?cursor=abc&per_page=2>; rel="next"'


def _two_pages(api) -> None:
    api.add("GET", "accounts", "accounts/index-page1-200.xml", headers={"Link": NEXT_PAGE})
    api.add("GET", "accounts", "accounts/index-page2-200.xml", query={"cursor": "abc"})


class TestIteration:
    def test_follows_next_links(self, api):
        _two_pages(api)

        codes = [account.account_code for account in Account.paginate(per_page=2)]

        assert codes == ["first", "second", "third"]
        assert len(api.requests) == 2
        assert api.requests[0].url.params["per_page"] == "2"
        # The next link already carries the cursor and filters.
        assert dict(api.requests[1].url.params) == {"cursor": "abc", "per_page": "2"}

    def test_pages_are_lazy(self, api):
        _two_pages(api)

        pages = Account.paginate(per_page=2).pages()
        first_page = next(pages)

        assert [a.account_code for a in first_page] == ["first", "second"]
        assert len(api.requests) == 1

    def test_records_are_loaded(self, api):
        _two_pages(api)

        third = list(Account.find_each(per_page=2))[-1]

        assert third.persisted
        assert third.closed
        assert third.uri == "https://api.recurly.com/v2/accounts/third"

    def test_filters_are_sent(self, api):
        api.add("GET", "accounts", "accounts/index-page2-200.xml")

        list(Account.all(state="closed", sort="updated_at"))

        assert api.last.url.params["state"] == "closed"
        assert api.last.url.params["sort"] == "updated_at"


class TestCountAndFirst:
    def test_count_uses_head(self, api):
        api.add("HEAD", "accounts", headers={"X-Records": "42"})

        assert Account.count(state="active") == 42
        assert api.last.method == "HEAD"
        assert api.last.url.params["state"] == "active"

    def test_first_requests_one_record(self, api):
        api.add("GET", "accounts", "accounts/index-page1-200.xml")

        account = Account.first()

        assert account.account_code == "first"
        assert api.last.url.params["per_page"] == "1"

    def test_first_on_empty_collection(self, api):
        api.add("GET", "accounts", body=b'<accounts type="array"></accounts>')

        assert Account.first() is None

    def test_nested_collection_path(self, api):
        api.add("GET", "accounts/abc/notes", body=b'<notes type="array"></notes>')

        pager = Pager(Account, "accounts/abc/notes")

        assert list(pager) == []
