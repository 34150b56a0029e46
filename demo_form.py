"""
Demo: lint the example forms, validate a few submissions in both modes,
and push them through the gateway in-process.
"""

from fastapi.testclient import TestClient

from dynform.analyzer import analyze_form
from dynform.config import Settings
from dynform.examples import build_personal_info_form
from dynform.serialization import form_to_yaml
from dynform.server import create_app
from dynform.session import FormSession
from dynform.storage import InMemorySubmissionStore
from dynform.validation import ValidationMode, validate_form


ATTEMPTS = [
    {"name": "Ada", "email": "ada@example.com", "age": 36, "gender": "Female", "subscribe": True},
    {"name": "Al", "email": "not-an-email", "age": 150, "gender": "female"},
    {"name": "Grace", "email": "grace@navy.mil", "gender": "Female", "subscribe": "yes"},
]


def print_result(label, result):
    if not result:
        print(f"  {label}: valid")
        return
    print(f"  {label}:")
    for name, errors in result.items():
        for error in errors:
            print(f"    {name}: {error}")


if __name__ == "__main__":
    form = build_personal_info_form()

    print("=" * 70)
    print(f"FORM: {form.name}")
    print("=" * 70)
    report = analyze_form(form)
    print(f"  {report.total_fields} fields, {report.required_fields} required, "
          f"{len(report.warnings)} warning(s)")
    print()

    for i, data in enumerate(ATTEMPTS, 1):
        print(f"Attempt {i}: {data}")
        print_result("client", validate_form(form, data, ValidationMode.CLIENT))
        print_result("server", validate_form(form, data, ValidationMode.SERVER))
        print()

    store = InMemorySubmissionStore()
    client = TestClient(create_app(store=store, settings=Settings()))
    for data in ATTEMPTS:
        session = FormSession(form.fields)
        for name, value in data.items():
            session.set_value(name, value)
        outcome = session.submit(client, "/submit-form")
        print(f"Submit -> success={outcome.success} message={outcome.message!r}")

    print()
    print(f"Stored submissions: {[s.summary() for s in store.list()]}")

    with open("example_form_output.yaml", "w") as f:
        f.write(form_to_yaml(form))
    print("Form exported to example_form_output.yaml")
