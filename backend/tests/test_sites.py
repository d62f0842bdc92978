"""
Tests for the per-site adapters against fixture markup.
"""

import asyncio

from jobscrapers.sites import (
    GreatRwandaJobsScraper,
    JobinRwandaScraper,
    KoraScraper,
    NdangiraScraper,
)


def assert_valid(jobs, source, min_title_length=3):
    """Every posting has a long-enough title, a URL and the source identifier."""
    for job in jobs:
        assert len(job.title) >= min_title_length
        assert job.url
        assert job.source == source


class TestJobinRwanda:
    """Test jobinrwanda.com: anchors with container fields, ?page=N pagination."""

    LISTING_URL = 'https://www.jobinrwanda.com/'

    PAGE_1 = """
    <html><body>
      <div class="card">
        <a href="/job/finance-officer">Finance Officer</a>
        <span class="company">Bank of Kigali</span>
        <span class="location">Kigali</span>
        <span class="date">Deadline 12/04/2025</span>
        <p>Prepare monthly reports.</p>
      </div>
      <article>
        <h3><a href="/job/it-support">IT Support Specialist</a></h3>
        <div class="employer">Rwanda Revenue Authority</div>
      </article>
      <a href="/jobs/ok">OK</a>
      <ul class="pager"><li><a href="?page=2">2</a></li></ul>
    </body></html>
    """

    PAGE_2 = """
    <html><body>
      <div class="card">
        <a href="/job/driver">Driver</a>
      </div>
      <ul class="pager"><li><a href="?page=1">1</a></li><li><a href="?page=2">2</a></li></ul>
    </body></html>
    """

    def test_extracts_and_paginates(self, fast_config, session_factory):
        factory = session_factory({
            self.LISTING_URL: self.PAGE_1,
            'https://www.jobinrwanda.com/?page=2': self.PAGE_2,
        })
        scraper = JobinRwandaScraper(config=fast_config('jobinrwanda'), session_factory=factory)

        jobs = asyncio.run(scraper.scrape())

        assert [job.title for job in jobs] == ["Finance Officer", "IT Support Specialist", "Driver"]
        assert_valid(jobs, 'jobinrwanda.com')

        officer = jobs[0]
        assert officer.url == 'https://www.jobinrwanda.com/job/finance-officer'
        assert officer.company == "Bank of Kigali"
        assert officer.location == "Kigali"
        assert officer.deadline == "Deadline 12/04/2025"
        assert officer.snippet == "Prepare monthly reports."

        support = jobs[1]
        assert support.company == "Rwanda Revenue Authority"
        assert support.location is None
        assert scraper.result.pages_visited == 2

    def test_job_title_starting_with_next_is_not_pagination(self, fast_config, session_factory):
        page_1 = """
        <html><body>
          <div class="card">
            <a href="/job/next-gen-officer">Next Generation Programme Officer</a>
          </div>
          <ul class="pager"><li><a href="?page=2">2</a></li></ul>
        </body></html>
        """
        page_2_url = 'https://www.jobinrwanda.com/?page=2'
        factory = session_factory({self.LISTING_URL: page_1, page_2_url: self.PAGE_2})
        config = fast_config('jobinrwanda', max_pages=2)

        jobs = asyncio.run(JobinRwandaScraper(config=config, session_factory=factory).scrape())

        assert factory.sessions[0].visited == [self.LISTING_URL, page_2_url]
        assert [job.title for job in jobs] == ["Next Generation Programme Officer", "Driver"]

    def test_follows_only_the_next_number(self, fast_config, session_factory):
        """On page 2 with links to 1, 3 and 4, only page 3 is followed."""
        page_2_url = 'https://www.jobinrwanda.com/jobs?page=2'
        page_3_url = 'https://www.jobinrwanda.com/jobs?page=3'
        page_2 = """
        <html><body>
          <div class="card"><a href="/job/chef">Head Chef</a></div>
          <a href="?page=1">1</a><a href="?page=3">3</a><a href="?page=4">4</a>
        </body></html>
        """
        page_3 = '<html><body><div class="card"><a href="/job/cook">Line Cook</a></div></body></html>'
        factory = session_factory({page_2_url: page_2, page_3_url: page_3})
        config = fast_config('jobinrwanda', listing_url=page_2_url, max_pages=2)

        jobs = asyncio.run(JobinRwandaScraper(config=config, session_factory=factory).scrape())

        session = factory.sessions[0]
        assert session.clicks == ['a[href="?page=3"]']
        assert session.visited == [page_2_url, page_3_url]
        assert [job.title for job in jobs] == ["Head Chef", "Line Cook"]


class TestNdangira:
    """Test ndangira.net: blog posts with inferred company and deadline."""

    LISTING_URL = 'https://www.ndangira.net/'

    PAGE_1 = """
    <html><body>
      <article class="post">
        <h2><a href="https://www.ndangira.net/finance-manager-at-bank-of-kigali/">Finance Manager at Bank of Kigali</a></h2>
        <div class="entry-summary"><p>Applications close on 15 March 2025 for this role.</p></div>
      </article>
      <article class="post">
        <h2><a href="/unicef-rwanda-jobs/">UNICEF Rwanda jobs</a></h2>
        <p>Deadline: 30/04/2025. Several positions open.</p>
      </article>
      <article class="post">
        <h2><a href="/news/">News</a></h2>
      </article>
      <div class="nav-links"><a class="page-numbers" href="https://www.ndangira.net/page/2/">2</a></div>
    </body></html>
    """

    PAGE_2 = """
    <html><body>
      <article>
        <h3><a href="/accountant-at-rwandair/">Accountant at RwandAir (2 positions)</a></h3>
      </article>
      <div class="nav-links"><a class="page-numbers" href="https://www.ndangira.net/">1</a></div>
    </body></html>
    """

    def scrape(self, fast_config, session_factory):
        factory = session_factory({
            self.LISTING_URL: self.PAGE_1,
            'https://www.ndangira.net/page/2/': self.PAGE_2,
        })
        scraper = NdangiraScraper(config=fast_config('ndangira'), session_factory=factory)
        return scraper, asyncio.run(scraper.scrape())

    def test_posts_across_pages(self, fast_config, session_factory):
        scraper, jobs = self.scrape(fast_config, session_factory)

        assert {job.title for job in jobs} == {
            "Finance Manager at Bank of Kigali",
            "UNICEF Rwanda jobs",
            "Accountant at RwandAir (2 positions)",
        }
        assert_valid(jobs, 'ndangira.net', min_title_length=5)
        assert scraper.result.pages_visited == 2

    def test_company_and_deadline_inferred(self, fast_config, session_factory):
        _, jobs = self.scrape(fast_config, session_factory)
        by_title = {job.title: job for job in jobs}

        finance = by_title["Finance Manager at Bank of Kigali"]
        assert finance.company == "Bank of Kigali"
        assert finance.deadline == "15 March 2025"
        assert finance.location == "Rwanda"
        assert finance.snippet == "Applications close on 15 March 2025 for this role."

        unicef = by_title["UNICEF Rwanda jobs"]
        assert unicef.company == "UNICEF Rwanda"
        assert unicef.deadline == "30/04/2025"
        assert unicef.url == 'https://www.ndangira.net/unicef-rwanda-jobs/'

        rwandair = by_title["Accountant at RwandAir (2 positions)"]
        assert rwandair.company == "RwandAir"
        assert rwandair.deadline is None

    def test_default_company_without_hint(self, fast_config, session_factory):
        html = '<html><body><article><h2><a href="/driver/">Driver needed</a></h2></article></body></html>'
        factory = session_factory({self.LISTING_URL: html})
        scraper = NdangiraScraper(config=fast_config('ndangira'), session_factory=factory)

        jobs = asyncio.run(scraper.scrape())

        assert jobs
        assert all(job.company == "Various Organizations" for job in jobs)


class TestKora:
    """Test kora.rw: search submit, then category traversal."""

    LISTING_URL = 'https://jobportal.kora.rw/'
    FINANCE_URL = 'https://jobportal.kora.rw/jobs/category/finance'
    HEALTH_URL = 'https://jobportal.kora.rw/jobs/category/health'

    LANDING = """
    <html><body>
      <form><button type="submit">Search</button></form>
      <ul>
        <li><a class="category-link" href="/jobs/category/finance">Finance</a></li>
        <li><a class="category-link" href="/jobs/category/health">Health</a></li>
        <li><a class="category-link" href="/jobs/category/finance">Finance</a></li>
      </ul>
    </body></html>
    """

    FINANCE = """
    <html><body>
      <div class="opportunity">
        <h3>Budget Analyst</h3>
        <span class="organization">Ministry of Finance and Economic Planning</span>
        <span class="expires">Expires 30 April 2025</span>
        <p>Support the national budget process.</p>
      </div>
    </body></html>
    """

    HEALTH = '<html><body><div class="position"><h3>Nurse Supervisor</h3></div></body></html>'

    def pages(self):
        return {
            self.LISTING_URL: self.LANDING,
            self.FINANCE_URL: self.FINANCE,
            self.HEALTH_URL: self.HEALTH,
        }

    def test_visits_each_category_once(self, fast_config, session_factory):
        factory = session_factory(self.pages())
        scraper = KoraScraper(config=fast_config('kora'), session_factory=factory)

        jobs = asyncio.run(scraper.scrape())

        session = factory.sessions[0]
        assert session.clicks == ['button[type="submit"]']
        assert session.visited == [self.LISTING_URL, self.FINANCE_URL, self.HEALTH_URL]
        assert [job.title for job in jobs] == ["Budget Analyst", "Nurse Supervisor"]
        assert scraper.result.pages_visited == 2
        assert_valid(jobs, 'kora.rw')

    def test_category_fields_and_defaults(self, fast_config, session_factory):
        factory = session_factory(self.pages())
        jobs = asyncio.run(KoraScraper(config=fast_config('kora'), session_factory=factory).scrape())

        analyst, nurse = jobs
        assert analyst.company == "Ministry of Finance and Economic Planning"
        assert analyst.deadline == "Expires 30 April 2025"
        assert analyst.location == "Rwanda"
        assert analyst.url == self.FINANCE_URL

        assert nurse.company == "Government of Rwanda"
        assert nurse.location == "Rwanda"

    def test_category_limit(self, fast_config, session_factory):
        factory = session_factory(self.pages())
        scraper = KoraScraper(config=fast_config('kora', max_pages=1), session_factory=factory)

        jobs = asyncio.run(scraper.scrape())

        assert [job.title for job in jobs] == ["Budget Analyst"]
        assert factory.sessions[0].visited == [self.LISTING_URL, self.FINANCE_URL]

    def test_broken_category_keeps_earlier_results(self, fast_config, session_factory):
        pages = self.pages()
        del pages[self.HEALTH_URL]
        factory = session_factory(pages)
        scraper = KoraScraper(config=fast_config('kora'), session_factory=factory)

        jobs = asyncio.run(scraper.scrape())

        assert [job.title for job in jobs] == ["Budget Analyst"]
        assert scraper.result.error_details[0]['page'] == 2

    def test_landing_page_without_categories(self, fast_config, session_factory):
        landing = '<html><body><div class="job-item"><h4>Procurement Officer</h4></div></body></html>'
        factory = session_factory({self.LISTING_URL: landing})
        scraper = KoraScraper(config=fast_config('kora'), session_factory=factory)

        jobs = asyncio.run(scraper.scrape())

        assert [job.title for job in jobs] == ["Procurement Officer"]
        assert factory.sessions[0].clicks == []
        assert factory.sessions[0].visited == [self.LISTING_URL]


class TestGreatRwandaJobs:
    """Test greatrwandajobs.com: cards with /page/N/ pagination."""

    LISTING_URL = 'https://www.greatrwandajobs.com/jobs/'

    PAGE_1 = """
    <html><body>
      <div class="job-listing">
        <h3 class="title"><a href="/job/12/project-manager">Project Manager</a></h3>
        <div class="organization">Enabel</div>
        <div class="city">Musanze</div>
        <div class="expires">Closing: 2025-05-01</div>
        <div class="excerpt">Lead a district agriculture programme.</div>
      </div>
      <div class="pagination"><a href="/jobs/page/2/">2</a><a href="/jobs/page/3/">3</a></div>
    </body></html>
    """

    PAGE_2 = """
    <html><body>
      <div class="position"><h3>Field Officer</h3></div>
      <div class="pagination"><a href="/jobs/">1</a><a href="/jobs/page/3/">3</a></div>
    </body></html>
    """

    def test_cards_and_page_limit(self, fast_config, session_factory):
        factory = session_factory({
            self.LISTING_URL: self.PAGE_1,
            'https://www.greatrwandajobs.com/jobs/page/2/': self.PAGE_2,
        })
        scraper = GreatRwandaJobsScraper(config=fast_config('greatrwandajobs', max_pages=2), session_factory=factory)

        jobs = asyncio.run(scraper.scrape())

        assert [job.title for job in jobs] == ["Project Manager", "Field Officer"]
        assert_valid(jobs, 'greatrwandajobs.com')
        assert factory.sessions[0].visited == [
            self.LISTING_URL,
            'https://www.greatrwandajobs.com/jobs/page/2/',
        ]

        manager = jobs[0]
        assert manager.url == 'https://www.greatrwandajobs.com/job/12/project-manager'
        assert manager.company == "Enabel"
        assert manager.location == "Musanze"
        assert manager.deadline == "Closing: 2025-05-01"
        assert manager.snippet == "Lead a district agriculture programme."
