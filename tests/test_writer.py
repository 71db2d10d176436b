import pytest

from opcrash.core import TypeRef
from opcrash.errors import InvalidArgumentError
from opcrash.expr import Literal, OperationCall
from opcrash.planner import NL, TAB, Block, ExpressionStatement
from opcrash.writer import JUnitTestCaseWriter, render_test_unit, write_test_units

from helpers import operation_named

PLAIN_HEADER_BODY = (
    TAB + NL
    + TAB + "/**" + NL
    + TAB + " * Executed before each testXXX()." + NL
    + TAB + " */" + NL
    + TAB + "protected void setUp() {" + NL
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


def _footer(name: str) -> str:
    return (
        TAB + f"public {name}(String pName) {{" + NL
        + TAB + TAB + "super(pName);" + NL
        + TAB + "}" + NL
        + TAB + NL
        + TAB + "public static junit.framework.Test suite() {" + NL
        + TAB + TAB + f"return new junit.framework.TestSuite({name}.class);" + NL
        + TAB + "}" + NL
        + TAB + NL
        + TAB + "public static void main(String[] args) {" + NL
        + TAB + TAB + f"junit.textui.TestRunner.run({name}.class);" + NL
        + TAB + "}" + NL
    )


@pytest.fixture
def blocks(catalog, loadee):
    default_ctor = operation_named(catalog, loadee, "<init>", 0)
    static_meth = operation_named(catalog, loadee, "staticMeth")
    block_call = Block(default_ctor)
    block_call.append(ExpressionStatement(OperationCall(default_ctor)))
    block_crash = Block(static_meth)
    block_crash.append(ExpressionStatement(OperationCall(static_meth, (Literal.of_int(3),))))
    return block_call, block_crash


def test_constructor_rejects_missing_arguments(loadee) -> None:
    with pytest.raises(InvalidArgumentError):
        JUnitTestCaseWriter(None, "", True, [])
    with pytest.raises(InvalidArgumentError):
        JUnitTestCaseWriter(loadee, None, True, [])
    with pytest.raises(InvalidArgumentError):
        JUnitTestCaseWriter(loadee, "", True, None)


@pytest.mark.parametrize(
    "type_name, suffix, expected",
    [
        ("client.sub.Loadee", 0, "LoadeeTest"),
        ("client.sub.Loadee", -1, "LoadeeTest"),
        ("client.sub.Loadee", -1256, "LoadeeTest"),
        ("client.sub.Loadee", 42, "LoadeeTest42"),
        ("client.sub.Loadee$StaticMember", 0, "StaticMemberTest"),
        ("client.sub.Loadee$StaticMember", 17, "StaticMemberTest17"),
        ("client.sub.Loadee$Inner", -1, "InnerTest"),
        ("client.sub.Loadee$Inner", 11, "InnerTest11"),
    ],
)
def test_simple_test_name(type_name: str, suffix: int, expected: str) -> None:
    writer = JUnitTestCaseWriter(TypeRef.parse(type_name), "", True, [], suffix)
    assert writer.get_simple_test_name() == expected


def test_header(loadee) -> None:
    assert JUnitTestCaseWriter(loadee, "", False, []).get_header() == (
        "public class LoadeeTest extends junit.framework.TestCase {" + NL + PLAIN_HEADER_BODY
    )
    assert JUnitTestCaseWriter(loadee, "", False, [], 5).get_header() == (
        "public class LoadeeTest5 extends junit.framework.TestCase {" + NL + PLAIN_HEADER_BODY
    )
    classified = JUnitTestCaseWriter(loadee, "", True, []).get_header()
    assert classified == (
        "public class LoadeeTest extends edu.gatech.cc.junit.FilteringTestCase {" + NL
        + TAB + NL
        + TAB + "/**" + NL
        + TAB + " * Executed before each testXXX()." + NL
        + TAB + " */" + NL
        + TAB + "protected void setUp() {" + NL
        + TAB + TAB + "/* Re-initialize static fields of loaded classes. */" + NL
        + TAB + TAB + "edu.gatech.cc.junit.reinit.ClassRegistry.resetClasses();" + NL
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


def test_footer(loadee, blocks) -> None:
    block_call, block_crash = blocks
    assert JUnitTestCaseWriter(loadee, "", False, []).get_footer() == _footer("LoadeeTest")
    assert JUnitTestCaseWriter(loadee, "", True, [block_crash]).get_footer() == (
        TAB + "protected String getNameOfTestedMeth() {" + NL
        + TAB + TAB + 'return "client.sub.Loadee.staticMeth";' + NL
        + TAB + "}" + NL
        + TAB + NL
        + _footer("LoadeeTest")
    )
    assert JUnitTestCaseWriter(loadee, "", False, [block_call, block_crash]).get_footer() == _footer("LoadeeTest")
    assert (
        JUnitTestCaseWriter(loadee, "", True, [block_call, block_crash]).get_footer()
        == JUnitTestCaseWriter(loadee, "", False, [block_call, block_crash]).get_footer()
    )


def test_tested_method_name(loadee, blocks) -> None:
    block_call, block_crash = blocks
    writer = JUnitTestCaseWriter(loadee, "", False, [])
    assert writer.get_tested_meth_name(block_crash) == "staticMeth"
    assert writer.get_tested_meth_name(block_call) == "<init>"
    assert writer.get_tested_meth_name() is None
    assert JUnitTestCaseWriter(loadee, "", False, [block_call, block_crash]).get_tested_meth_name() is None
    assert JUnitTestCaseWriter(loadee, "", False, [block_crash]).get_tested_meth_name() == "staticMeth"


def test_test_cases(loadee, blocks) -> None:
    block_call, block_crash = blocks

    def classified(number, block):
        return (
            TAB + f"public void test{number}() throws Throwable {{" + NL
            + TAB + TAB + "try" + block.render(TAB + TAB, loadee) + NL
            + TAB + TAB + "catch (Exception e) {dispatchException(e);}" + NL
            + TAB + "}" + NL
        )

    assert JUnitTestCaseWriter(loadee, "", True, [block_crash]).get_test_cases() == NL + classified(0, block_crash)
    assert JUnitTestCaseWriter(loadee, "", True, [block_call, block_crash]).get_test_cases() == (
        NL + classified(0, block_call) + NL + classified(1, block_crash)
    )
    assert JUnitTestCaseWriter(loadee, "", False, [block_call, block_crash]).get_test_cases() == (
        NL + TAB + "public void test0() throws Throwable " + block_call.render(TAB, loadee) + NL
        + NL + TAB + "public void test1() throws Throwable " + block_crash.render(TAB, loadee) + NL
    )
    assert block_crash.render(TAB + TAB, loadee) == "{" + NL + TAB * 3 + "Loadee.staticMeth(3);" + NL + TAB * 2 + "}"


def test_render_test_unit(loadee, blocks) -> None:
    block_call, block_crash = blocks
    text = render_test_unit(loadee, [block_call, block_crash], classify=True, suffix=2)
    assert text.startswith("package client.sub;" + NL + NL + "public class LoadeeTest2 extends ")
    assert text.endswith(_footer("LoadeeTest2") + "}" + NL)
    assert text.count("dispatchException(e)") == 2
    assert text == render_test_unit(loadee, [block_call, block_crash], classify=True, suffix=2)

    commented = JUnitTestCaseWriter(TypeRef.parse("InDefaultPackage"), "/* generated */", False, []).render_test_unit()
    assert commented.startswith("/* generated */" + NL + "public class InDefaultPackageTest extends junit.framework.TestCase {")


def test_write_test_units_splits_and_numbers_files(tmp_path, loadee, blocks) -> None:
    block_call, block_crash = blocks
    single = write_test_units(loadee, [block_call, block_crash], tmp_path / "one", methods_per_file=5)
    assert single == [tmp_path / "one" / "client" / "sub" / "LoadeeTest.java"]
    assert "public class LoadeeTest extends" in single[0].read_text(encoding="utf-8")

    split = write_test_units(loadee, [block_call, block_crash, block_call], tmp_path / "many", methods_per_file=2)
    assert [path.name for path in split] == ["LoadeeTest1.java", "LoadeeTest2.java"]
    second = split[1].read_text(encoding="utf-8")
    assert "public void test0()" in second
    assert "public void test1()" not in second

    with pytest.raises(InvalidArgumentError):
        write_test_units(loadee, [block_call], tmp_path, methods_per_file=0)


def test_write_test_units_consumes_generators(tmp_path, loadee, blocks) -> None:
    block_call, block_crash = blocks
    pulled = []

    def produce(count):
        for number in range(count):
            pulled.append(number)
            yield block_call if number % 2 else block_crash

    exact = write_test_units(loadee, produce(2), tmp_path / "exact", methods_per_file=2)
    assert [path.name for path in exact] == ["LoadeeTest.java"]
    assert pulled == [0, 1]

    paths = write_test_units(loadee, produce(5), tmp_path / "lazy", methods_per_file=2)
    assert [path.name for path in paths] == ["LoadeeTest1.java", "LoadeeTest2.java", "LoadeeTest3.java"]
    assert paths[2].read_text(encoding="utf-8").count("public void test") == 1
    assert write_test_units(loadee, produce(0), tmp_path / "none") == []
