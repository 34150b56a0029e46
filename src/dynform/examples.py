"""
Example forms used by the demo, the CLI and the tests.

Two schemas a front-end can toggle between: a short personal-details form
and a longer business-details form.
"""
from dynform.model import (
    CheckboxField,
    EmailField,
    Form,
    NumberField,
    SelectField,
    TextField,
)


def build_personal_info_form() -> Form:
    return Form(
        name="Personal Info",
        fields=[
            TextField(name="name", label="Name", required=True, min_length=3),
            EmailField(name="email", label="Email", required=True),
            NumberField(name="age", label="Age", min=18, max=100),
            SelectField(
                name="gender",
                label="Gender",
                required=True,
                options=("Male", "Female", "Other"),
            ),
            CheckboxField(name="subscribe", label="Subscribe to newsletter"),
        ],
    )


def build_business_info_form() -> Form:
    return Form(
        name="Business Info",
        fields=[
            TextField(
                name="company",
                label="Company Name",
                required=True,
                min_length=2,
                max_length=50,
            ),
            EmailField(name="businessEmail", label="Business Email", required=True),
            NumberField(
                name="employeeCount",
                label="Employee Count",
                required=True,
                min=1,
                max=10000,
            ),
            SelectField(
                name="industry",
                label="Industry",
                required=True,
                options=(
                    "Technology",
                    "Healthcare",
                    "Finance",
                    "Education",
                    "Manufacturing",
                    "Other",
                ),
            ),
            NumberField(name="revenue", label="Annual Revenue", min=0),
            CheckboxField(name="acceptTerms", label="Accept Terms", required=True),
        ],
    )


EXAMPLE_FORMS = {
    "personal": build_personal_info_form,
    "business": build_business_info_form,
}
