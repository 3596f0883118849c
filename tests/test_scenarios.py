from testgen.schemas.testcase import Element, Endpoint, SpaAnalysis, TestType
from testgen.services.page_analyzer import PageAnalyzer
from testgen.services.scenarios import ScenarioGenerator

USERS_URL = "https://api.example.com/users"


def test_endpoint_edge_cases_cover_the_four_scenarios():
    endpoint = Endpoint(name="Create User", url=USERS_URL, method="POST")

    cases = ScenarioGenerator().endpoint_edge_cases(endpoint)

    assert [tc.name for tc in cases] == [
        f"POST {USERS_URL} - Missing Required Parameters",
        f"POST {USERS_URL} - Invalid Parameter Values",
        f"POST {USERS_URL} - Rate Limiting",
        f"POST {USERS_URL} - Large Payload",
    ]
    assert all(tc.edge_case and tc.type is TestType.API for tc in cases)
    assert all(tc.source_name == "Create User" for tc in cases)
    assert cases[0].steps[0].action == f"Prepare POST {USERS_URL} request"
    assert cases[2].steps[1].expected_result == "API should handle rate limiting appropriately"


def test_input_edge_cases_depend_on_input_type():
    generator = ScenarioGenerator()

    text = generator.element_edge_cases(
        Element(type="input", identifier="username", attributes={"name": "username", "type": "text"}),
        page_name="Login",
    )
    email = generator.element_edge_cases(
        Element(type="input", identifier="contact-email", attributes={"name": "email", "type": "email"}),
        page_name="Contact",
    )
    number = generator.element_edge_cases(
        Element(type="input", identifier="qty", attributes={"type": "number"}),
        page_name="Cart",
    )

    assert [tc.name for tc in text] == [
        "username Validation - Empty Input",
        "username Validation - Very Long Input",
        "username Validation - Special Characters",
    ]
    assert email[0].steps[1].action == 'Enter "notanemail" in the email field'
    assert [tc.name for tc in number][2] == "qty Validation - Non-numeric Input"
    assert all(tc.source_name == "username" and tc.type is TestType.UI for tc in text)
    assert "Login page" in text[0].description


def test_password_inputs_and_links_have_no_edge_cases():
    generator = ScenarioGenerator()

    password = Element(type="input", identifier="password", attributes={"type": "password"})
    link = Element(type="link", identifier="nav-home", attributes={"href": "#/"})

    assert generator.element_edge_cases(password, page_name="Login") == []
    assert generator.element_edge_cases(link, page_name="Home") == []


def test_button_and_select_edge_cases():
    generator = ScenarioGenerator()

    button = generator.element_edge_cases(Element(type="button", identifier="save", text="Save"), "Profile")
    select = generator.element_edge_cases(
        Element(type="select", identifier="country", attributes={"name": "country"}),
        "Profile",
    )

    assert [tc.name for tc in button] == ["Save Test - Rapid Clicking"]
    assert [tc.name for tc in select] == [
        "country Test - Select First Option",
        "country Test - Select Last Option",
    ]


def test_authentication_case_targets_first_endpoint():
    endpoints = [
        Endpoint(name="Get Users", url=USERS_URL, method="GET"),
        Endpoint(name="Create User", url=USERS_URL, method="POST"),
    ]

    case = ScenarioGenerator().authentication_case(endpoints)

    assert case.name == "API Authentication Test"
    assert case.source_name == "Get Users"
    assert len(case.steps) == 4
    assert case.steps[1].action == f"Send GET request to {USERS_URL} with authentication token"
    assert ScenarioGenerator().authentication_case([]) is None


def test_collection_scenarios_put_authentication_first():
    endpoints = [Endpoint(name="Get Users", url=USERS_URL, method="GET")]

    cases = ScenarioGenerator().collection_scenarios(endpoints)

    assert cases[0].name == "API Authentication Test"
    assert len(cases) == 1 + 4


def test_spa_flow_cases():
    page = "https://spa.example.com"
    analyzer = PageAnalyzer()
    elements = analyzer.analyze(page)

    cases = ScenarioGenerator().spa_flow_cases(elements, analyzer.analyze_spa(page), "Shop", page_url=page)

    assert [tc.name for tc in cases] == [
        "Shop - Route Navigation Test",
        "Shop - AJAX Loading Test",
        "Shop - Dynamic UI Interaction Test",
        "Shop - Form Submission Test",
    ]
    routes = cases[0]
    assert len(routes.steps) == 1 + 4
    assert routes.steps[2].expected_result.startswith("URL should change to #/products")
    ajax = cases[1]
    assert ajax.steps[3].action == "Trigger AJAX call with submit:#contact-form"
    dynamic = cases[2]
    assert dynamic.steps[1].action == "Trigger the modal event by click on #show-modal-button"
    assert dynamic.steps[1].expected_result == "The target element #modal-dialog should change from hidden to visible"
    form = cases[3]
    assert form.source_name == "contact-form"
    assert [step.action for step in form.steps[1:3]] == ["Fill in the name field", "Fill in the email field"]
    assert all(tc.type is TestType.UI and not tc.edge_case for tc in cases)


def test_no_spa_flows_without_spa_analysis():
    elements = PageAnalyzer().analyze("https://example.com/login")

    assert ScenarioGenerator().spa_flow_cases(elements, SpaAnalysis(), "Login") == []
