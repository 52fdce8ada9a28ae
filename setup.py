from setuptools import find_packages, setup


extras_require = {}

extras_require["test"] = [
    'pytest>=7.4,<9.0'
]

extras_require["all"] = [
    *extras_require["test"],
]


setup(
    name='kangan',
    version='0.3.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    url='https://github.com/harshkangan/kangan',
    license='MIT',
    author='Harsh Kangan',
    author_email='admin@harshkangan.com',
    description='Admin console two-factor login for the Harsh Kangan store',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    install_requires=[
        'pyotp>=2.9.0,<3.0',
        'qrcode[pil]>=7.4,<9.0',
        'psycopg2-binary>=2.9.10,<3.0',
        'requests>=2.31.0,<3.0',
        'pydantic>=2.0,<3.0',
        'python-dotenv>=1.0.0,<2.0',
        'python-dateutil>=2.8.2,<3.0'
    ],
    extras_require=extras_require,
    python_requires=">=3.10"
)
