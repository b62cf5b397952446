from setuptools import setup, find_namespace_packages

setup(
    name="a_routing_dns",
    version="0.1.0",
    description="A rule based DNS router",
    packages=find_namespace_packages(include=["indisoluble.*"]),
    python_requires=">=3.10",
    install_requires=["dnspython>=2.8.0,<3.0.0", "prometheus-client>=0.20.0"],
    extras_require={"test": ["pytest>=8.0.0"]},
    entry_points={
        "console_scripts": ["a-routing-dns = indisoluble.a_routing_dns.main:main"]
    },
)
