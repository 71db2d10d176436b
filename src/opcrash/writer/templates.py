"""Fixed JUnit 3 text surrounding the generated test methods."""
from __future__ import annotations

from opcrash.planner.blocks import NL, TAB

PLAIN_BASE_CLASS = "junit.framework.TestCase"
FILTERING_BASE_CLASS = "edu.gatech.cc.junit.FilteringTestCase"

_RESET_STATIC_STATE = (
    TAB + TAB + "/* Re-initialize static fields of loaded classes. */" + NL
    + TAB + TAB + "edu.gatech.cc.junit.reinit.ClassRegistry.resetClasses();" + NL
)


def header(test_name: str, classify: bool) -> str:
    base_class = FILTERING_BASE_CLASS if classify else PLAIN_BASE_CLASS
    return (
        f"public class {test_name} extends {base_class} {{" + NL
        + TAB + NL
        + TAB + "/**" + NL
        + TAB + " * Executed before each testXXX()." + NL
        + TAB + " */" + NL
        + TAB + "protected void setUp() {" + NL
        + (_RESET_STATIC_STATE if classify else "")
        + TAB + TAB + "//TODO: my setup code goes here." + NL
        + TAB + "}" + NL
        + TAB + NL
        + TAB + "/**" + NL
        + TAB + " * Executed after each testXXX()." + NL
        + TAB + " */" + NL
        + TAB + "protected void tearDown() throws Exception {" + NL
        + TAB + TAB + "super.tearDown();" + NL
        + TAB + TAB + "//TODO: my tear down code goes here." + NL
        + TAB + "}" + NL
    )


def tested_method_accessor(qualified_name: str) -> str:
    return (
        TAB + "protected String getNameOfTestedMeth() {" + NL
        + TAB + TAB + f'return "{qualified_name}";' + NL
        + TAB + "}" + NL
        + TAB + NL
    )


def footer(test_name: str) -> str:
    return (
        TAB + f"public {test_name}(String pName) {{" + NL
        + TAB + TAB + "super(pName);" + NL
        + TAB + "}" + NL
        + TAB + NL
        + TAB + "public static junit.framework.Test suite() {" + NL
        + TAB + TAB + f"return new junit.framework.TestSuite({test_name}.class);" + NL
        + TAB + "}" + NL
        + TAB + NL
        + TAB + "public static void main(String[] args) {" + NL
        + TAB + TAB + f"junit.textui.TestRunner.run({test_name}.class);" + NL
        + TAB + "}" + NL
    )


def classified_test_method(number: int, body: str) -> str:
    """``body`` is a block already rendered at two tabs of indentation."""

    return (
        TAB + f"public void test{number}() throws Throwable {{" + NL
        + TAB + TAB + "try" + body + NL
        + TAB + TAB + "catch (Exception e) {dispatchException(e);}" + NL
        + TAB + "}" + NL
    )


def plain_test_method(number: int, body: str) -> str:
    return TAB + f"public void test{number}() throws Throwable " + body + NL
