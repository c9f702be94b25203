"""testledger: record test run outcomes in a relational table.

A test runner delivers lifecycle messages to a TestMessageObserver,
which fans them out to subscribed visitors. The TestResultCollector
visitor keeps one result per test case and writes them all when the
run finishes.
"""

__version__ = "0.1.0"
