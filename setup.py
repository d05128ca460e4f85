"""Install the identity verification post-login hooks."""

from setuptools import setup, find_packages

setup(
    name='idv-actions',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    py_modules=['wsgi'],
    install_requires=[
        "flask",
        "pyjwt",
        "requests",
        "python-json-logger",
        "pytz",
        "python-dateutil",
        "click",
    ],
    extras_require={
        'test': [
            "pytest",
            "jsonschema",
        ],
    },
    entry_points={
        'console_scripts': [
            'generate-session-token=idv_actions.generate_token:generate_token',
        ],
    },
    include_package_data=True,
    zip_safe=False
)
