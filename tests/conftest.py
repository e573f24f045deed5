import pytest

from hosted_login import (
    AuthorizeUrlSource,
    BrowsingSurface,
    CodeExchanger,
    ExternalOpener,
    FlowConfig,
    NavigationPolicyEngine,
)

BASE_URL = "https://auth.example.com"
CALLBACK_URI = "https://x/callback"
SOCIAL_HOST = "provider"


class FakeSurface(BrowsingSurface):
    def __init__(self, document_text=""):
        self.commands = []
        self.document_text = document_text
        self.reads = 0

    def execute(self, command):
        self.commands.append(command)

    async def read_document_text(self):
        self.reads += 1
        if isinstance(self.document_text, Exception):
            raise self.document_text
        return self.document_text


class FakeOpener(ExternalOpener):
    def __init__(self, opened=True):
        self.opened = opened
        self.urls = []

    async def open(self, url):
        self.urls.append(url)
        if isinstance(self.opened, Exception):
            raise self.opened
        return self.opened


class FakeExchanger(CodeExchanger):
    def __init__(self, success=True):
        self.success = success
        self.codes = []

    async def exchange(self, code):
        self.codes.append(code)
        if isinstance(self.success, Exception):
            raise self.success
        return self.success


class FakeAuthorizeUrls(AuthorizeUrlSource):
    def __init__(self):
        self.count = 0

    def generate(self):
        self.count += 1
        return f"{BASE_URL}/oauth/authorize?attempt={self.count}"


@pytest.fixture
def config():
    return FlowConfig(
        base_url=BASE_URL,
        client_id="client-123",
        callback_uri=CALLBACK_URI,
        social_prelogin_hosts=(SOCIAL_HOST,),
    )


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def opener():
    return FakeOpener()


@pytest.fixture
def exchanger():
    return FakeExchanger()


@pytest.fixture
def authorize_urls():
    return FakeAuthorizeUrls()


@pytest.fixture
def engine(config, surface, opener, exchanger, authorize_urls):
    return NavigationPolicyEngine(
        config=config,
        surface=surface,
        opener=opener,
        authorize_urls=authorize_urls,
        exchanger=exchanger,
    )
