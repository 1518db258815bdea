"""
Pytest configuration and fixtures.
"""

import logging

import pytest
from rich.logging import RichHandler
from lxml import etree


LOCATOR_XML = """<body>
  <span>Hey</span>
  <p>
    <span></span>
    <div></div>
    <div id="user" data-element="name">davert</div>
  </p>
  <div class="form-wrapper" id="buttons-wrapper">
  <fieldset id="fieldset-buttons">
    <table>
      <tr>
        <td>List</td>
        <td>Edit</td>
        <td>Delete</td>
      </tr>
      <tr>
        <td>Show</td>
        <td>Also Edit</td>
        <td>Also Delete</td>
      </tr>
    </table>
    <div id="submit-wrapper" class="form-wrapper">
      <div id="submit-label" class="form-label"> </div>
      <div id="submit-element" class="form-element">
        <button name="submit" id="submit" type="submit" tabindex="3">Sign In</button>
      </div>
    </div>
    <div id="remember-wrapper" class="form-wrapper">
      <div class="form-label" id="remember-label"> </div>
      <div id="remember-element" class="form-element">
        <input type="hidden" name="session" value="1" />
        <input type="hidden" name="remember" value="please_do" />
        <input type="hidden" name="agree" value="no" />
        <input type="checkbox" data-value="yes" id="remember" value="1" tabindex="4" />
        <label for="remember" class="optional">Remember Me</label>
      </div>
    </div>
    <div class="form-field">
      <input name="name0" label="Выберите услугу" type="text" value=""/>
    </div>
    <div class="form-field">
      <input name="name1" label="Выберите услугу" type="text" value=""/>
    </div>
  </fieldset>
  <label>Hello<a href="#">Please click</a></label>
  </div>
  <input type="hidden" name="return_url" value="" id="return_url" />
</body>"""


LOGIN_HTML = """<html><body>
<header>
  <a href="/">Home</a>
  <button type="button">Delete</button>
</header>
<form id="login">
  <label for="email">Email</label>
  <input id="email" name="email" type="text">
  <label for="password">Password</label>
  <input id="password" name="password" type="password" placeholder="Your password">
  <input type="checkbox" id="remember" name="remember">
  <label for="remember">Remember Me</label>
  <label><input type="radio" name="plan" value="pro"> Pro plan</label>
  <input type="hidden" name="token" value="Email">
  <textarea name="comment" aria-label="Comment"></textarea>
  <select name="country">
    <option value="us">United States</option>
    <optgroup label="Europe">
      <option value="de">Germany</option>
    </optgroup>
  </select>
  <input type="submit" value="Log In">
  <button type="button" name="help-button">Need help?</button>
  <a href="/forgot">Forgot password?</a>
</form>
<div id="toolbar">
  <span title="Close dialog">x</span>
  <div class="action">Archive selected</div>
</div>
<table>
  <tr id="row-1"><td>First</td><td><a href="#">Save</a> <a href="#">Save draft</a></td></tr>
  <tr id="row-2"><td>Second</td><td><button type="button">Delete</button></td></tr>
</table>
</body></html>"""


@pytest.fixture(autouse=True)
def isolated_configuration():
    """Reset the global settings and the default filter pipeline around each test."""
    from semantic_locator.config import reset_settings

    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def locator_doc():
    """Root element of the locator DSL fixture document."""
    return etree.fromstring(LOCATOR_XML)


@pytest.fixture
def locator_search(locator_doc):
    """DocumentSearch over the locator DSL fixture document."""
    from semantic_locator.browsers.document_search import DocumentSearch

    return DocumentSearch(locator_doc)


@pytest.fixture
def login_search():
    """DocumentSearch over a login page."""
    from semantic_locator.browsers.document_search import DocumentSearch

    return DocumentSearch.from_html(LOGIN_HTML)


@pytest.fixture
def login_html_file(tmp_path):
    """Login page saved to disk, for the CLI."""
    path = tmp_path / "login.html"
    path.write_text(LOGIN_HTML, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Remove handlers installed by setup_logging and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in list(root.handlers):
        if isinstance(handler, (RichHandler, logging.FileHandler)):
            handler.close()
            root.removeHandler(handler)
    root.setLevel(level)
